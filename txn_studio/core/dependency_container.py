# Dependency Injection Container.

from typing import Any, Optional

import httpx

from txn_studio.event_log import ApiCallRecorder, EventAggregator
from txn_studio.settings import Settings
from txn_studio.store import ChangeChannel, KeyValueStorage, TransactionStore, create_storage


class DependencyContainer:
    """Holds the shared handles of one studio session.

    Every store created here shares the same storage and change channel, so
    views built from one container see each other's writes. Aggregators are
    created explicitly and handed to whichever producers and presenters need them.
    """

    def __init__(
        self,
        settings: Settings,
        storage: KeyValueStorage,
        channel: Optional[ChangeChannel] = None,
    ) -> None:
        """
        Args:
            settings: Application settings.
            storage: Backend holding the persisted collections.
            channel: Change channel shared by readers of `storage`; a new one is created if omitted.
        """
        self.settings = settings
        self.storage = storage
        self.channel = channel or ChangeChannel()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "DependencyContainer":
        settings = settings or Settings()
        return cls(settings=settings, storage=create_storage(settings))

    def create_transaction_store(self) -> TransactionStore:
        return TransactionStore(self.storage, self.channel, key=self.settings.get_transactions_key())

    def create_event_aggregator(self) -> EventAggregator:
        return EventAggregator(silent_methods=self.settings.get_silent_api_methods())

    def create_http_client(self, aggregator: EventAggregator, **client_kwargs: Any) -> httpx.Client:
        """Create an httpx client whose completed calls are logged to `aggregator`."""
        return ApiCallRecorder(aggregator).attach(httpx.Client(**client_kwargs))
