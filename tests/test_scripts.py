"""
Smoke tests for the preparation scripts.

We run each script's ``main`` against small fixtures written to a
temporary directory and only check the files it produces.
"""

from __future__ import annotations

import logging

import pytest
import yaml

from scripts import parse_open311, prepare_news


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("textprep")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def configs(tmp_path):
    stopwords = tmp_path / "stopwords.txt"
    stopwords.write_text(";German\nund\n", encoding="utf-8")

    data_cfg = {
        "open311": {
            "path": str(tmp_path / "requests.tsv"),
            "evaluate_path": str(tmp_path / "requests-evaluate.tsv"),
            "expected_columns": 3,
            "code_index": 0,
            "text_index": 2,
        },
        "preprocessing": {
            "stopwords": {"enabled": True, "path": str(stopwords)},
            "synonyms": {"enabled": True},
            "order": ["stopwords", "synonyms"],
        },
        "news": {
            "base_path": str(tmp_path / "bbc"),
            "categories": ["sport", "tech"],
            "train_path": str(tmp_path / "out" / "news-train.txt"),
            "test_path": str(tmp_path / "out" / "news-test.txt"),
        },
        "split": {"random_state": 0},
    }
    run_cfg = {
        "general": {"random_state": 42},
        "paths": {"logs_dir": str(tmp_path / "logs")},
        "logging": {"level": "INFO", "to_file": False},
    }

    data_path = tmp_path / "data.yaml"
    run_path = tmp_path / "run.yaml"
    data_path.write_text(yaml.safe_dump(data_cfg), encoding="utf-8")
    run_path.write_text(yaml.safe_dump(run_cfg), encoding="utf-8")
    return tmp_path, str(data_path), str(run_path)


def test_parse_open311_writes_accepted_records(configs):
    tmp_path, data_path, run_path = configs
    (tmp_path / "requests.tsv").write_text(
        "Type\tRequest\tExtra\n"
        "8\tx\tLampe und Mast defekt\n"
        "99\tx\tunbekannt\n"
        "broken line\n",
        encoding="utf-8",
    )
    output = tmp_path / "open311.tsv"

    exit_code = parse_open311.main(
        ["--data-config", data_path, "--run-config", run_path, "--output", str(output)]
    )

    assert exit_code == 0
    assert output.read_text(encoding="utf-8") == "Laterne  Mast defekt\t8\n"


def test_prepare_news_writes_split_files(configs):
    tmp_path, data_path, run_path = configs
    for category, n in (("sport", 100), ("tech", 10)):
        category_dir = tmp_path / "bbc" / category
        category_dir.mkdir(parents=True)
        for i in range(n):
            (category_dir / f"{i:03d}.txt").write_text(
                f"Headline {i}\n\nLead {i}\n", encoding="utf-8"
            )

    exit_code = prepare_news.main(["--data-config", data_path, "--run-config", run_path])

    assert exit_code == 0
    train_lines = (tmp_path / "out" / "news-train.txt").read_text(encoding="utf-8").splitlines()
    test_lines = (tmp_path / "out" / "news-test.txt").read_text(encoding="utf-8").splitlines()
    assert len(train_lines) == 80
    assert len(test_lines) == 20 + 10
    assert all(line.endswith("\tsport") for line in train_lines)


def test_parse_open311_evaluate_reads_evaluation_export(configs):
    tmp_path, data_path, run_path = configs
    (tmp_path / "requests.tsv").write_text(
        "Type\tRequest\tExtra\n2\tx\tGlasscherbe\n", encoding="utf-8"
    )
    (tmp_path / "requests-evaluate.tsv").write_text(
        "Type\tRequest\tExtra\n24\tx\tPfosten umgefahren\n", encoding="utf-8"
    )
    output = tmp_path / "open311-evaluate.tsv"

    exit_code = parse_open311.main(
        [
            "--data-config",
            data_path,
            "--run-config",
            run_path,
            "--evaluate",
            "--output",
            str(output),
        ]
    )

    assert exit_code == 0
    assert output.read_text(encoding="utf-8") == "Poller umgefahren\t24\n"
