from .aggregator import EventAggregator, LogTab, PresenterView
from .generation import GENERATE_METHOD, run_generation
from .http_recorder import ApiCallRecorder
from .scenario_reporter import ScenarioRunReporter, StepOutcome

__all__ = [
    "ApiCallRecorder",
    "EventAggregator",
    "GENERATE_METHOD",
    "LogTab",
    "PresenterView",
    "ScenarioRunReporter",
    "StepOutcome",
    "run_generation",
]
