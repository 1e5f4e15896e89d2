"""Segmentation, upload and indexing services."""
