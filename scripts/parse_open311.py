"""
Parse and normalize Bonn Open311 service requests.

This script is a convenience wrapper around
`textprep.data.records.RecordParser`, which:

- reads the configured service request TSV
- drops malformed lines and quarantines unknown service types
- applies the configured stopword / synonym normalizers
- optionally writes the accepted records as ``text<TAB>code`` lines

The output (or the in-memory records) is what the external trainer
consumes.

Usage (from project root):

    python -m scripts.parse_open311 --output data/processed/open311.tsv
    # or
    python scripts/parse_open311.py --input data/raw/other.tsv
    # parse the held-out evaluation export (open311.evaluate_path)
    python -m scripts.parse_open311 --evaluate
"""

from __future__ import annotations

import argparse
from typing import Optional

from textprep.data.datasets import load_data_config, records_to_frame
from textprep.data.records import LabeledText, RecordParser
from textprep.data.split import write_labeled_texts
from textprep.data.vocabulary import Vocabulary
from textprep.features.preprocessing import build_normalizers
from textprep.utils.pipeline_utils import get_logger, load_run_config


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.
    """
    parser = argparse.ArgumentParser(
        description="Parse and normalize Bonn Open311 service requests."
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
        "--input",
        type=str,
        default=None,
        help="Override the input TSV path from the data config.",
    )
    parser.add_argument(
        "--evaluate",
        action="store_true",
        help="Read open311.evaluate_path instead of open311.path.",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write accepted records as text<TAB>code lines to this path.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list] = None) -> int:
    args = parse_args(argv)

    run_cfg = load_run_config(args.run_config)
    logger = get_logger(name="textprep", config=run_cfg, log_file_suffix="open311")

    data_cfg = load_data_config(args.data_config)
    open311_cfg = data_cfg["open311"]
    default_key = "evaluate_path" if args.evaluate else "path"
    input_path = args.input or open311_cfg[default_key]

    normalizers = build_normalizers(data_cfg["preprocessing"])
    logger.info(
        "Parsing %s with normalizers: %s",
        input_path,
        [type(n).__name__ for n in normalizers] or "none",
    )

    vocabulary = Vocabulary.bonn()
    parser = RecordParser(
        input_path,
        vocabulary,
        expected_columns=int(open311_cfg.get("expected_columns", 3)),
        code_index=int(open311_cfg.get("code_index", 0)),
        text_index=int(open311_cfg.get("text_index", 2)),
        normalizers=normalizers,
        encoding=open311_cfg.get("encoding", "utf-8"),
    )

    df = records_to_frame(parser)
    logger.info(
        "Accepted %d records, dropped %d malformed lines, %d unknown service types.",
        parser.accepted_count,
        parser.malformed_count,
        parser.unknown_count,
    )
    if parser.unknown_codes:
        logger.info("Unknown service types: %s", sorted(parser.unknown_codes))

    if not df.empty:
        counts = df["label"].map(vocabulary.name_of).value_counts()
        logger.info("Records per service type:\n%s", counts.to_string())

    if args.output:
        written = write_labeled_texts(
            (LabeledText(text=t, label=f"{c:g}") for t, c in zip(df["text"], df["label"])),
            args.output,
        )
        logger.info("Wrote %d records to %s", written, args.output)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
