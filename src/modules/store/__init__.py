"""Data access adapter: the per-request snapshot and its single writer."""
