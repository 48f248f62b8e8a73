"""
Data loading and dataset utilities.

This subpackage provides:
- the closed vocabulary of Open311 service categories
- record types and the lazy TSV service request parser
- the per-category news train/test splitter
- config loading and DataFrame hand-off helpers for the trainer.
"""
