"""
Local SQLite note store

- connection: Database connection management and schema
- documents: Document rows
- tags: Tag rows and document/tag links
- settings: JSON key/value settings, including the editor UI state
"""

from .connection import DatabaseConnection

__all__ = ["DatabaseConnection"]
