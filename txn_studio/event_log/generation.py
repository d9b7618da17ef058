"""Logging wrapper around the opaque script/scenario generation service."""

import logging
from typing import Any, Callable, Optional, TypeVar

from .aggregator import EventAggregator

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Generation calls are logged under this method name; it is silent by default.
GENERATE_METHOD = "GENERATE"


def run_generation(
    aggregator: EventAggregator,
    target: str,
    request: Any,
    generate: Callable[[], T],
) -> Optional[T]:
    """Call `generate` and log the outcome as a GENERATE call.

    Args:
        aggregator: Receives the GENERATE log entry.
        target: What is being generated, logged as the URL (e.g. "scenarios").
        request: The request payload the generation is based on.
        generate: The generation service call.

    Returns:
        The generated result, or None if generation failed. A failure is
        logged with status 500 rather than raised.
    """
    try:
        result = generate()
    except Exception as e:
        logger.exception(f"Generation of {target} failed: {e}")
        aggregator.record_api_call(
            GENERATE_METHOD,
            target,
            request,
            {"status": 500, "headers": {}, "body": {"error": f"Failed to generate {target}"}},
        )
        return None
    aggregator.record_api_call(
        GENERATE_METHOD,
        target,
        request,
        {"status": 200, "headers": {}, "body": {"message": f"Generated {target}", "result": result}},
    )
    return result
