"""Heap ingestion: segment text into document records and load them into Indx heaps."""

__version__ = "0.1.0"
