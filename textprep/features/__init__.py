"""
Text normalization utilities.

This subpackage includes:
- the shared delimiter tokenizer and stopword filter
- synonym canonicalization and tagging for German service requests.
"""
