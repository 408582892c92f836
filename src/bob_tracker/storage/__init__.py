"""
Persistence gateways.

- file_storage.py: JSON-lines file (default backend)
- sqlite_storage.py: single-table SQLite database
"""

from __future__ import annotations

from .factory import open_gateway

__all__ = ["open_gateway"]
