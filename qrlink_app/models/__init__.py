"""
Database models for the QR link shortener.

``URL`` holds the short-link records; ``ClickStat`` is the per-click table
kept for referential integrity with ``urls`` (nothing writes to it yet).
"""

from .url import URL
from .stat import ClickStat

__all__ = ["URL", "ClickStat"]
