"""
Top-level package for the Open311 / news text preparation pipeline.

This package contains modules for:
- the closed vocabulary of service categories
- stopword removal and synonym canonicalization
- parsing tab-separated service requests with quarantine of bad lines
- stratified train/test splitting of the news dataset
- shared configuration and logging helpers

Model training and evaluation happen outside this package; it only
produces normalized, labeled records and split files.
"""

__version__ = "0.1.0"
