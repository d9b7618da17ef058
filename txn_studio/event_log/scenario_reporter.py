"""Reports the lifecycle of a scenario run as test-run events."""

import logging
import uuid
from enum import Enum
from typing import List, Optional

from txn_studio.exceptions import ScenarioStateError
from txn_studio.models import TestRunDetails

from .aggregator import EventAggregator

logger = logging.getLogger(__name__)

RUNNING_COLOR = "#2196f3"


class StepOutcome(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    UNIMPLEMENTED = "unimplemented"

    @property
    def icon(self) -> str:
        return {"passed": "✓", "failed": "✗", "unimplemented": "❓"}[self.value]

    @property
    def color(self) -> str:
        return {"passed": "#4caf50", "failed": "#f44336", "unimplemented": "#ff9800"}[self.value]


class ScenarioRunReporter:
    """Emits one test-run event per lifecycle point of a single scenario run.

    start() -> "running"; each step() -> "running"; finish() -> "completed" if
    every step passed, otherwise "failed".
    """

    def __init__(
        self,
        aggregator: EventAggregator,
        title: str,
        scenario_id: Optional[str] = None,
        scenario_run_id: Optional[str] = None,
    ) -> None:
        self.aggregator = aggregator
        self.title = title
        self.scenario_id = scenario_id or f"scenario-{uuid.uuid4().hex}"
        self.scenario_run_id = scenario_run_id or f"run-{uuid.uuid4().hex}"
        self.outcomes: List[StepOutcome] = []
        self._started = False
        self._finished = False

    def _check_running(self, action: str) -> None:
        if not self._started:
            raise ScenarioStateError(f"Cannot {action}: scenario run {self.scenario_run_id} was not started")
        if self._finished:
            raise ScenarioStateError(f"Cannot {action}: scenario run {self.scenario_run_id} already finished")

    def start(self) -> None:
        if self._started:
            raise ScenarioStateError(f"Scenario run {self.scenario_run_id} already started")
        self._started = True
        logger.info(f"Scenario '{self.title}' started (run {self.scenario_run_id})")
        self.aggregator.record_test_event(
            self.scenario_id,
            self.scenario_run_id,
            f"Scenario started: {self.title}",
            "running",
            RUNNING_COLOR,
        )

    def step(self, text: str, outcome: StepOutcome, details: Optional[TestRunDetails] = None) -> None:
        self._check_running("report a step")
        outcome = StepOutcome(outcome)
        self.outcomes.append(outcome)
        self.aggregator.record_test_event(
            self.scenario_id,
            self.scenario_run_id,
            f"{outcome.icon} {text}",
            "running",
            outcome.color,
            details,
        )

    @property
    def overall_outcome(self) -> StepOutcome:
        if StepOutcome.UNIMPLEMENTED in self.outcomes:
            return StepOutcome.UNIMPLEMENTED
        if StepOutcome.FAILED in self.outcomes:
            return StepOutcome.FAILED
        return StepOutcome.PASSED

    def finish(self) -> StepOutcome:
        self._check_running("finish")
        self._finished = True
        outcome = self.overall_outcome
        status = "completed" if outcome is StepOutcome.PASSED else "failed"
        logger.info(f"Scenario '{self.title}' finished: {outcome.value}")
        self.aggregator.record_test_event(
            self.scenario_id,
            self.scenario_run_id,
            f"Scenario: {self.title} ({outcome.value})",
            status,
            outcome.color,
        )
        return outcome
