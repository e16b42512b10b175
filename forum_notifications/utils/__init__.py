"""Utility helpers for reusable functionality."""

from .datetime import get_app_timezone, parse_iso_datetime, utc_now, utc_now_isoformat

__all__ = ["get_app_timezone", "parse_iso_datetime", "utc_now", "utc_now_isoformat"]
