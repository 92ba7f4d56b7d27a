"""
Storage endpoint client layer.

Provides async HTTP communication with publishers and aggregators.
"""

from evidence_vault.api.endpoints.blobs import read_blob, store_blob
from evidence_vault.api.http_client import AsyncHttpClient

__all__ = ["AsyncHttpClient", "read_blob", "store_blob"]
