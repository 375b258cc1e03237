"""
Shared utilities for index conversion, dataset layout and random streams.
"""
