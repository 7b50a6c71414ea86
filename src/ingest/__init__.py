"""CSV ingestion layer.

This module reads raw payloads, detects changes, and runs extraction.
It hands parsed rows to the transforms layer for shaping.
"""
