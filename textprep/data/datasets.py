"""
Dataset configuration and trainer hand-off utilities.

This module is responsible for:
- reading the dataset configuration from config/data.yaml
- converting parsed records into pandas DataFrames with the standard
  columns ("text", "label") expected by the downstream trainer
- reading split files written by the news splitter back into DataFrames
- loading header-bearing labeled TSV files (e.g. the Wikipedia detox
  comment set) and normalizing their columns to the same interface

The trainer itself is an external collaborator: it receives the frames
(or the file paths) produced here and nothing in this package inspects
the model it returns.
"""

from __future__ import annotations

import csv
import os
from typing import Any, Dict, Iterable, Union

import pandas as pd
import yaml

from textprep.data.records import LabeledText, ServiceRecord


DEFAULT_DATA_CONFIG_PATH = "config/data.yaml"

REQUIRED_SECTIONS = ("open311", "news", "split", "preprocessing")


def _load_yaml(path: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file and return it as a dictionary.

    Raises
    ------
    FileNotFoundError
        If the YAML file does not exist.
    ValueError
        If the YAML file is empty or cannot be parsed.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)

    if cfg is None:
        raise ValueError(f"Config file is empty or invalid: {path}")

    return cfg


def load_data_config(config_path: str = DEFAULT_DATA_CONFIG_PATH) -> Dict[str, Any]:
    """
    Load and return the full data configuration dictionary.

    Parameters
    ----------
    config_path : str, optional
        Path to the data YAML configuration file.

    Returns
    -------
    Dict[str, Any]
        Dictionary containing the "open311", "news", "split" and
        "preprocessing" sections.

    Raises
    ------
    KeyError
        If a required section is missing.
    """
    cfg = _load_yaml(config_path)

    for section in REQUIRED_SECTIONS:
        if section not in cfg:
            raise KeyError(f'Missing "{section}" section in data config: {config_path}')

    return cfg


def records_to_frame(
    records: Iterable[Union[ServiceRecord, LabeledText]],
) -> pd.DataFrame:
    """
    Collect records into a DataFrame with "text" and "label" columns.

    ServiceRecord codes become the label; LabeledText keeps its label.
    The input may be a lazy RecordParser, which is drained here.

    Parameters
    ----------
    records : Iterable[Union[ServiceRecord, LabeledText]]
        Parsed records.

    Returns
    -------
    pd.DataFrame
        One row per record.
    """
    rows = []
    for record in records:
        if isinstance(record, ServiceRecord):
            rows.append({"text": record.text, "label": record.code})
        else:
            rows.append({"text": record.text, "label": record.label})

    return pd.DataFrame(rows, columns=["text", "label"])


def read_split_file(path: str) -> pd.DataFrame:
    """
    Read a ``text<TAB>label`` split file into a DataFrame.

    No quoting is applied: every line is split on its tab as written.

    Raises
    ------
    FileNotFoundError
        If the split file does not exist.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Split file not found: {path}")

    if os.path.getsize(path) == 0:
        return pd.DataFrame(columns=["text", "label"])

    return pd.read_csv(
        path,
        sep="\t",
        header=None,
        names=["text", "label"],
        quoting=csv.QUOTE_NONE,
        dtype=str,
        keep_default_na=False,
        encoding="utf-8",
    )


def load_labeled_tsv(
    path: str,
    text_column: str = "SentimentText",
    label_column: str = "Sentiment",
) -> pd.DataFrame:
    """
    Load a header-bearing labeled TSV and normalize its columns.

    The defaults match the Wikipedia detox comment files
    (``Sentiment<TAB>SentimentText``).

    Parameters
    ----------
    path : str
        Path to the TSV file.
    text_column : str
        Name of the text column in the header.
    label_column : str
        Name of the label column in the header.

    Returns
    -------
    pd.DataFrame
        DataFrame with columns ["text", "label"].

    Raises
    ------
    FileNotFoundError
        If the file cannot be found.
    ValueError
        If required columns are missing.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Dataset TSV not found at: {path}")

    df = pd.read_csv(
        path,
        sep="\t",
        quoting=csv.QUOTE_NONE,
        keep_default_na=False,
        encoding="utf-8",
    )

    missing_cols = [col for col in (text_column, label_column) if col not in df.columns]
    if missing_cols:
        raise ValueError(
            f"Missing required column(s) in dataset TSV: {missing_cols}. "
            f"Available columns: {list(df.columns)}"
        )

    df = df.rename(columns={text_column: "text", label_column: "label"})
    df["text"] = df["text"].astype(str)

    return df[["text", "label"]].reset_index(drop=True)
