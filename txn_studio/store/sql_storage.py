import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime, Text
from sqlalchemy.engine import Engine
from sqlmodel import Field, Session, SQLModel

from .storage import KeyValueStorage

logger = logging.getLogger(__name__)


class StoredDocument(SQLModel, table=True):
    """One whole persisted document, addressed by its storage key."""

    __tablename__ = "stored_documents"  # type: ignore

    key: str = Field(primary_key=True)
    value: str = Field(sa_column=Column(Text, nullable=False))
    updated_at: datetime = Field(
        # Naive UTC timestamp stored in a TIMESTAMP WITHOUT TIME ZONE column
        default_factory=lambda: datetime.now(timezone.utc).replace(tzinfo=None),
        sa_column=Column(DateTime(timezone=False), nullable=False),
    )


class SqlStorage(KeyValueStorage):
    """Key/value storage backed by the `stored_documents` table."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def create_tables(self) -> None:
        SQLModel.metadata.create_all(self.engine, tables=[StoredDocument.__table__])

    def get(self, key: str) -> Optional[str]:
        with Session(self.engine) as session:
            document = session.get(StoredDocument, key)
            return document.value if document is not None else None

    def set(self, key: str, value: str) -> None:
        with Session(self.engine) as session:
            document = session.get(StoredDocument, key)
            if document is None:
                document = StoredDocument(key=key, value=value)
            else:
                document.value = value
                document.updated_at = datetime.now(timezone.utc).replace(tzinfo=None)
            session.add(document)
            session.commit()
        logger.debug(f"Stored document '{key}' ({len(value)} chars)")

    def remove(self, key: str) -> None:
        with Session(self.engine) as session:
            document = session.get(StoredDocument, key)
            if document is not None:
                session.delete(document)
                session.commit()
