"""
Shared utility functions.

This subpackage includes:
- run configuration loading
- seeding and reproducibility helpers
- directory management
- lightweight logging helpers used by the preparation scripts.
"""
