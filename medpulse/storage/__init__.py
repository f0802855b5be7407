"""
Storage module.

Handles reads and writes against the hosted data store or an in-memory mock.
"""

from medpulse.storage.base import Storage, StorageError
from medpulse.storage.supabase import SupabaseStorage, MockSupabaseStorage, create_storage

__all__ = [
    "Storage",
    "StorageError",
    "SupabaseStorage",
    "MockSupabaseStorage",
    "create_storage",
]
