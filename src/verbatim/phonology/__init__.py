"""Phoneme notation, feature tables, alignment and error-pattern classification."""
