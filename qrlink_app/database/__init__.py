"""
Database package: declarative base and the shared-connection gateway.
"""

from .connection import Base, Database

__all__ = ["Base", "Database"]
