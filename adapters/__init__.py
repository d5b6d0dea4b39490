"""
Adapters package - External service connections.
Key/value storage adapter over the SQL database.
"""

from adapters.storage_adapter import KeyValueStorage

__all__ = [
    "KeyValueStorage",
]
