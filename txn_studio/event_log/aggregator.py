"""Merged API-call and test-run telemetry with drawer surfacing rules."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import IntEnum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from txn_studio.core.generic_events import Event
from txn_studio.models import ApiCallEvent, TestRunDetails, TestRunEvent, TestRunStatus
from txn_studio.settings import DEFAULT_SILENT_METHODS

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class LogTab(IntEnum):
    API = 0
    TEST = 1


@dataclass(frozen=True)
class PresenterView:
    """What the log drawer reads: both logs newest first, the selected tab and visibility."""

    api_logs: Tuple[ApiCallEvent, ...]
    test_logs: Tuple[TestRunEvent, ...]
    selected_tab: LogTab
    is_surfaced: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "apiLogs": [event.model_dump(mode="json") for event in self.api_logs],
            "testLogs": [event.model_dump(mode="json") for event in self.test_logs],
            "selectedTab": int(self.selected_tab),
            "isSurfaced": self.is_surfaced,
        }


def _utc_now() -> datetime:
    return datetime.now(UTC)


class EventAggregator:
    """Two independent newest-first logs plus the drawer's selection state.

    API calls surface the drawer on the API tab unless their method exactly
    matches one of the silent methods (background calls such as generation
    are logged for audit but must not pop the drawer open). Test-run events
    always surface the drawer on the test tab.

    Instances are passed explicitly to producers and presenters; there is no
    module-level instance.

    Attributes:
        changed: Dispatched with "api_log", "test_log", "cleared", "active_log"
            or "surfaced" after each state change.
    """

    def __init__(
        self,
        silent_methods: Iterable[str] = DEFAULT_SILENT_METHODS,
        clock: Optional[Clock] = None,
    ) -> None:
        self._silent_methods = frozenset(silent_methods)
        self._clock = clock or _utc_now
        self._api_log: List[ApiCallEvent] = []
        self._test_log: List[TestRunEvent] = []
        self._active_log = LogTab.API
        self._is_surfaced = False
        self.changed: Event[str] = Event("event_log_changed")

    @property
    def api_logs(self) -> Tuple[ApiCallEvent, ...]:
        return tuple(self._api_log)

    @property
    def test_logs(self) -> Tuple[TestRunEvent, ...]:
        return tuple(self._test_log)

    @property
    def active_log(self) -> LogTab:
        return self._active_log

    @property
    def is_surfaced(self) -> bool:
        return self._is_surfaced

    @property
    def silent_methods(self) -> frozenset:
        return self._silent_methods

    def _timestamp(self) -> str:
        return self._clock().isoformat()

    def is_silent(self, method: str) -> bool:
        return method in self._silent_methods

    def record_api_call(self, method: str, url: str, request: Any, response: Any) -> ApiCallEvent:
        """Log a completed API call at the head of the API log."""
        event = ApiCallEvent(
            timestamp=self._timestamp(),
            method=method,
            url=url,
            request=request,
            response=response,
        )
        self._api_log.insert(0, event)
        if not self.is_silent(method):
            self._active_log = LogTab.API
            self._is_surfaced = True
        logger.debug(f"API call logged: {method} {url} ({event.severity.value})")
        self.changed.dispatch("api_log")
        return event

    def record_test_event(
        self,
        scenario_id: str,
        scenario_run_id: str,
        content: str,
        status: TestRunStatus,
        color: str,
        details: Optional[TestRunDetails] = None,
    ) -> TestRunEvent:
        """Log a scenario-run event at the head of the test log and surface the test tab."""
        event = TestRunEvent(
            timestamp=self._timestamp(),
            scenario_id=scenario_id,
            scenario_run_id=scenario_run_id,
            content=content,
            status=status,
            color=color,
            details=details.model_copy(deep=True) if details is not None else None,
        )
        self._test_log.insert(0, event)
        self._active_log = LogTab.TEST
        self._is_surfaced = True
        logger.debug(f"Test event logged for run {scenario_run_id}: {status}")
        self.changed.dispatch("test_log")
        return event

    def clear_all(self) -> None:
        """Empty both logs. The selected tab and drawer visibility are left as they are."""
        self._api_log.clear()
        self._test_log.clear()
        self.changed.dispatch("cleared")

    def set_active_log(self, index: Union[int, LogTab]) -> None:
        """Select the API (0) or test (1) log.

        Raises:
            ValueError: If `index` is neither 0 nor 1.
        """
        self._active_log = LogTab(index)
        self.changed.dispatch("active_log")

    def set_surfaced(self, surfaced: bool) -> None:
        self._is_surfaced = bool(surfaced)
        self.changed.dispatch("surfaced")

    def presenter_view(self) -> PresenterView:
        return PresenterView(
            api_logs=self.api_logs,
            test_logs=self.test_logs,
            selected_tab=self._active_log,
            is_surfaced=self._is_surfaced,
        )
