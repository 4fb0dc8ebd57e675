"""Reporting, presets and assertion helpers built on the core comparator."""
