"""Parsing, normalization and structural comparison of HTML trees."""
