"""Shortest path search engines and their candidate bookkeeping."""
