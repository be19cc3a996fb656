"""Utility helpers."""

from __future__ import annotations

from visiondoctor.utils.logging_config import setup_logging


__all__ = ["setup_logging"]
