"""
Pipeline and utility helpers.

This module centralizes common functionality used across the project:

- loading the run configuration (config/run.yaml)
- ensuring directories exist before writing files
- seeding random number generators for reproducible splits
- constructing loggers that respect config/logging settings

The preparation scripts (Open311 parsing, news splitting) rely on these
utilities. Core classes never read configuration themselves.
"""

from __future__ import annotations

import logging
import os
import random
from typing import Any, Dict, Optional

import numpy as np
import yaml


DEFAULT_RUN_CONFIG_PATH = "config/run.yaml"


# ---------------------------------------------------------------------------
# Config loading
# ---------------------------------------------------------------------------


def load_run_config(
    config_path: str = DEFAULT_RUN_CONFIG_PATH,
) -> Dict[str, Any]:
    """
    Load and return the run configuration dictionary.

    Parameters
    ----------
    config_path : str
        Path to the run YAML configuration file.

    Returns
    -------
    Dict[str, Any]
        Parsed configuration with sections such as "general", "paths"
        and "logging".

    Raises
    ------
    FileNotFoundError
        If the YAML file does not exist.
    ValueError
        If the YAML file is empty or cannot be parsed.
    """
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Run config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)

    if cfg is None:
        raise ValueError(f"Run config file is empty or invalid: {config_path}")

    return cfg


# ---------------------------------------------------------------------------
# Filesystem utilities
# ---------------------------------------------------------------------------


def ensure_dir_exists(path: str) -> None:
    """
    Ensure that a directory exists (create it if necessary).

    Parameters
    ----------
    path : str
        Directory path. Empty strings are ignored so that callers can pass
        ``os.path.dirname`` of a bare file name.
    """
    if path and not os.path.exists(path):
        os.makedirs(path, exist_ok=True)


# ---------------------------------------------------------------------------
# Reproducibility utilities
# ---------------------------------------------------------------------------


def seed_everything(seed: int = 42) -> None:
    """
    Seed Python and NumPy RNGs for reproducible dataset splits.

    Parameters
    ----------
    seed : int
        Global random seed.
    """
    random.seed(seed)
    np.random.seed(seed)


# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------


def _parse_log_level(level_str: str) -> int:
    """
    Convert a string log level into a logging module constant.

    Unknown names fall back to INFO.
    """
    level_str = (level_str or "INFO").upper()
    return {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }.get(level_str, logging.INFO)


def get_logger(
    name: str,
    config: Dict[str, Any],
    log_file_suffix: Optional[str] = None,
) -> logging.Logger:
    """
    Construct and return a logger that respects the logging section of
    the run config.

    Parameters
    ----------
    name : str
        Logger name. Use "textprep" to also capture the library loggers
        (``textprep.data.records`` and friends) through propagation.
    config : Dict[str, Any]
        Run configuration.
    log_file_suffix : Optional[str]
        Optional suffix appended to the log file name (e.g., "news").

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    # If the logger already has handlers, assume it's already configured.
    if logger.handlers:
        return logger

    logging_cfg = config.get("logging", {}) or {}
    paths_cfg = config.get("paths", {}) or {}

    level = _parse_log_level(logging_cfg.get("level", "INFO"))
    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Optional file handler
    if bool(logging_cfg.get("to_file", False)):
        logs_dir = paths_cfg.get("logs_dir", "logs")
        ensure_dir_exists(logs_dir)

        file_prefix = logging_cfg.get("file_prefix", "textprep")
        if log_file_suffix:
            filename = f"{file_prefix}_{log_file_suffix}.log"
        else:
            filename = f"{file_prefix}.log"

        file_handler = logging.FileHandler(
            os.path.join(logs_dir, filename), encoding="utf-8"
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
