import os
from typing import Tuple

from dotenv import load_dotenv

# Load .env file variables into environment
load_dotenv(verbose=True)

DEFAULT_TRANSACTIONS_KEY = "savedTransactions"
DEFAULT_SILENT_METHODS = ("GENERATE",)
STORAGE_BACKENDS = ("memory", "file", "sql")


class Settings:
    """Application configuration settings loaded from environment variables."""

    # --- Logging Settings ---
    def get_log_level(self, default: str = "INFO") -> str:
        """Gets the configured log level, defaulting if not set."""
        return os.getenv("LOG_LEVEL", default).upper()

    # --- Storage Settings ---
    def get_storage_backend(self) -> str:
        """Returns the storage backend name: one of memory, file or sql."""
        return os.getenv("TXN_STUDIO_STORAGE", "memory").strip().lower()

    def get_storage_dir(self) -> str:
        """Returns the directory used by the file storage backend."""
        return os.getenv("TXN_STUDIO_STORAGE_DIR", ".txn_studio")

    def get_database_url(self) -> str:
        """Returns the database URL used by the sql storage backend."""
        return os.getenv("DATABASE_URL", "sqlite:///txn_studio.db")

    def get_transactions_key(self) -> str:
        """Returns the storage key of the saved transactions collection."""
        return os.getenv("TXN_STUDIO_TRANSACTIONS_KEY", DEFAULT_TRANSACTIONS_KEY)

    # --- Event Log Settings ---
    def get_silent_api_methods(self) -> Tuple[str, ...]:
        """Returns the method names whose API calls are logged without surfacing the drawer."""
        raw = os.getenv("TXN_STUDIO_SILENT_METHODS")
        if raw is None:
            return DEFAULT_SILENT_METHODS
        return tuple(method.strip().upper() for method in raw.split(",") if method.strip())
