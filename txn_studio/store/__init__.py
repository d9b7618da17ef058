from .notifications import ChangeChannel
from .sql_storage import SqlStorage, StoredDocument
from .storage import FileStorage, InMemoryStorage, KeyValueStorage, create_storage
from .transaction_store import TransactionStore, decode_collection, encode_collection

__all__ = [
    "ChangeChannel",
    "FileStorage",
    "InMemoryStorage",
    "KeyValueStorage",
    "SqlStorage",
    "StoredDocument",
    "TransactionStore",
    "create_storage",
    "decode_collection",
    "encode_collection",
]
