"""Data ingestion and join pipeline.

This module reads delimited sources into record stores and drives
the fixed sequence of sort and merge-join stages over them.
"""
