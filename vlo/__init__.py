"""Faceted metadata search: field value normalization and language code resolution."""
