"""Shared utilities for the heap ingestion tooling."""
