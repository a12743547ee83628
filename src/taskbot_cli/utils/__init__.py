"""Utility helpers for Taskbot CLI."""

from .datetime import normalize_date, parse_date, now_utc

__all__ = ["normalize_date", "parse_date", "now_utc"]
