from enum import Enum


class Severity(str, Enum):
    """Display severity attached to log events and transaction statuses."""

    SUCCESS = "success"
    CAUTION = "caution"
    ERROR = "error"
    INFO = "info"
    NEUTRAL = "neutral"

    @classmethod
    def from_http_status(cls, status: object) -> "Severity":
        """Map an HTTP status code to a severity; anything that is not a 2xx-5xx integer is neutral."""
        if not isinstance(status, int) or isinstance(status, bool):
            return cls.NEUTRAL
        if 200 <= status < 300:
            return cls.SUCCESS
        if 300 <= status < 400:
            return cls.CAUTION
        if 400 <= status < 600:
            return cls.ERROR
        return cls.NEUTRAL
