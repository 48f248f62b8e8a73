"""
Basic tests for configuration loading and trainer hand-off utilities.

These tests validate that:

- the repository configs load and contain their core sections
- config errors surface as FileNotFoundError / ValueError / KeyError
- parsed records convert to DataFrames with "text" and "label" columns
- split files and labeled TSVs read back without quoting artifacts
"""

from __future__ import annotations

import os

import pytest
import yaml

from textprep.data.datasets import (
    load_data_config,
    load_labeled_tsv,
    read_split_file,
    records_to_frame,
)
from textprep.data.records import LabeledText, RecordParser, ServiceRecord
from textprep.data.split import write_labeled_texts
from textprep.data.vocabulary import Vocabulary
from textprep.utils.pipeline_utils import load_run_config


CONFIG_DIR = os.path.join(os.path.dirname(__file__), os.pardir, "config")
DATA_CONFIG_PATH = os.path.join(CONFIG_DIR, "data.yaml")
RUN_CONFIG_PATH = os.path.join(CONFIG_DIR, "run.yaml")


def test_load_data_config_has_required_keys():
    cfg = load_data_config(DATA_CONFIG_PATH)

    for section in ("open311", "news", "split", "preprocessing"):
        assert section in cfg

    open311 = cfg["open311"]
    assert open311["expected_columns"] == 3
    assert open311["code_index"] == 0
    assert open311["text_index"] == 2
    assert cfg["news"]["categories"] == [
        "business",
        "entertainment",
        "politics",
        "sport",
        "tech",
    ]


def test_load_run_config_has_logging_section():
    cfg = load_run_config(RUN_CONFIG_PATH)
    assert "logging" in cfg
    assert "general" in cfg


def test_load_data_config_missing_section(tmp_path):
    path = tmp_path / "data.yaml"
    path.write_text(yaml.safe_dump({"open311": {}, "news": {}}), encoding="utf-8")
    with pytest.raises(KeyError):
        load_data_config(str(path))


def test_load_data_config_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ValueError):
        load_data_config(str(path))


def test_load_data_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_data_config(str(tmp_path / "nope.yaml"))


def test_records_to_frame_from_service_records():
    df = records_to_frame(
        [ServiceRecord(code=2.0, text="Glas"), ServiceRecord(code=8.0, text="Laterne")]
    )
    assert list(df.columns) == ["text", "label"]
    assert df["text"].tolist() == ["Glas", "Laterne"]
    assert df["label"].tolist() == [2.0, 8.0]


def test_records_to_frame_drains_parser(tmp_path):
    path = tmp_path / "requests.tsv"
    path.write_text("Type\tRequest\tExtra\n2\ta\tx\n99\tb\tx\n", encoding="utf-8")
    parser = RecordParser(str(path), Vocabulary.bonn(), text_index=1)

    df = records_to_frame(parser)
    assert len(df) == 1
    assert parser.unknown_codes == {"99"}


def test_records_to_frame_empty():
    df = records_to_frame([])
    assert df.empty
    assert list(df.columns) == ["text", "label"]


def test_read_split_file_round_trip_keeps_quotes(tmp_path):
    path = str(tmp_path / "news-train.txt")
    records = [
        LabeledText('He said "no comment" today', "politics"),
        LabeledText("Shares up 5%", "business"),
    ]
    write_labeled_texts(records, path)

    df = read_split_file(path)
    assert df["text"].tolist() == [r.text for r in records]
    assert df["label"].tolist() == ["politics", "business"]


def test_read_split_file_empty(tmp_path):
    path = tmp_path / "news-test.txt"
    path.write_text("", encoding="utf-8")
    df = read_split_file(str(path))
    assert df.empty


def test_read_split_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_split_file(str(tmp_path / "missing.txt"))


def test_load_labeled_tsv_normalizes_columns(tmp_path):
    path = tmp_path / "wikipedia-detox.tsv"
    path.write_text(
        "Sentiment\tSentimentText\n1\tThanks for the help\n0\tStop vandalising\n",
        encoding="utf-8",
    )
    df = load_labeled_tsv(str(path))
    assert list(df.columns) == ["text", "label"]
    assert df["text"].tolist() == ["Thanks for the help", "Stop vandalising"]
    assert df["label"].tolist() == [1, 0]


def test_load_labeled_tsv_missing_columns(tmp_path):
    path = tmp_path / "bad.tsv"
    path.write_text("a\tb\n1\t2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_labeled_tsv(str(path))
