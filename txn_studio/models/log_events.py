import copy
import json
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .severity import Severity

TestRunStatus = Literal["running", "completed", "failed"]


class LogEventBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: str = Field()


class ApiCallEvent(LogEventBase):
    """One outbound API call, logged after it completed.

    Failure is encoded in `response["status"]`, never raised.
    """

    kind: Literal["api_call"] = "api_call"
    method: str = Field()
    url: str = Field()
    request: Optional[Any] = Field(default=None)
    response: Optional[Any] = Field(default=None)

    @field_validator("request", "response", mode="before")
    @classmethod
    def _detach_payload(cls, value: Any) -> Any:
        return copy.deepcopy(value)

    @property
    def status_code(self) -> Optional[int]:
        if isinstance(self.response, dict):
            status = self.response.get("status")
            if isinstance(status, int) and not isinstance(status, bool):
                return status
        return None

    @property
    def severity(self) -> Severity:
        return Severity.from_http_status(self.status_code)


class TestRunDetails(BaseModel):
    """Optional diagnostics attached to a test-run event."""

    model_config = ConfigDict(frozen=True)

    suggestion: Optional[str] = Field(default=None)
    expected: Optional[Any] = Field(default=None)
    actual: Optional[Any] = Field(default=None)
    error: Optional[str] = Field(default=None)

    @field_validator("expected", "actual", mode="before")
    @classmethod
    def _detach_value(cls, value: Any) -> Any:
        return copy.deepcopy(value)

    def summary_lines(self) -> List[str]:
        lines = []
        if self.error:
            lines.append(f"Error: {self.error}")
        if self.expected is not None and self.actual is not None:
            lines.append(f"Expected: {json.dumps(self.expected)}")
            lines.append(f"Actual: {json.dumps(self.actual)}")
        if self.suggestion:
            lines.append(f"Suggestion: {self.suggestion}")
        return lines


class TestRunEvent(LogEventBase):
    """One lifecycle point of a scenario run."""

    kind: Literal["test_run"] = "test_run"
    scenario_id: str = Field()
    scenario_run_id: str = Field()
    content: str = Field()
    status: TestRunStatus = Field()
    color: str = Field()
    details: Optional[TestRunDetails] = Field(default=None)


LogEvent = Annotated[Union[ApiCallEvent, TestRunEvent], Field(discriminator="kind")]
