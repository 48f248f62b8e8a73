"""
Build the BBC news training and test files.

This script is a convenience wrapper around
`textprep.data.split.DatasetSplitter`, which:

- reads every article under the configured category directories
- keeps the headline and lead of each article
- shuffles each category and splits it into training and test samples
- replaces the configured training and test files

Usage (from project root):

    python -m scripts.prepare_news
    # or
    python scripts/prepare_news.py --base-path /data/bbc --seed 7
"""

from __future__ import annotations

import argparse
from typing import Optional

from textprep.data.datasets import load_data_config
from textprep.data.split import NEWS_CATEGORIES, DatasetSplitter, load_news_corpus
from textprep.utils.pipeline_utils import get_logger, load_run_config, seed_everything


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.
    """
    parser = argparse.ArgumentParser(
        description="Split the BBC news corpus into training and test files."
    )
    parser.add_argument(
        "--data-config",
        type=str,
        default="config/data.yaml",
        help="Path to data config YAML (default: config/data.yaml).",
    )
    parser.add_argument(
        "--run-config",
        type=str,
        default="config/run.yaml",
        help="Path to run config YAML (default: config/run.yaml).",
    )
    parser.add_argument(
        "--base-path",
        type=str,
        default=None,
        help="Override the corpus root directory from the data config.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Override split.random_state from the data config.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list] = None) -> int:
    args = parse_args(argv)

    run_cfg = load_run_config(args.run_config)
    logger = get_logger(name="textprep", config=run_cfg, log_file_suffix="news")

    general_cfg = run_cfg.get("general", {}) or {}
    seed_everything(int(general_cfg.get("random_state", 42)))

    data_cfg = load_data_config(args.data_config)
    news_cfg = data_cfg["news"]
    split_cfg = data_cfg["split"] or {}

    base_path = args.base_path or news_cfg["base_path"]
    random_state = args.seed if args.seed is not None else split_cfg.get("random_state")

    logger.info("=" * 80)
    logger.info("Loading news corpus from %s", base_path)
    corpus = load_news_corpus(
        base_path,
        categories=news_cfg.get("categories") or NEWS_CATEGORIES,
        encoding=news_cfg.get("encoding", "utf-8"),
    )

    splitter = DatasetSplitter(random_state=random_state)
    train, test = splitter.prepare(
        corpus,
        train_path=news_cfg["train_path"],
        test_path=news_cfg["test_path"],
    )

    logger.info("News split completed: %d train, %d test.", len(train), len(test))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
