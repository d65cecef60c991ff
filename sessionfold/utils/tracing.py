"""OpenTelemetry span helpers.

Spans are recorded only when the application installs an SDK tracer provider;
otherwise the API's no-op tracer is used.
"""

import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Span, Status, StatusCode


def get_tracer() -> trace.Tracer:
    """Get the tracer used for sessionfold spans."""
    if os.getenv("SESSIONFOLD_OTEL_ENABLED", "true").lower() != "true":
        return trace.NoOpTracer()
    service_name = os.getenv("SESSIONFOLD_OTEL_SERVICE_NAME", "sessionfold")
    return trace.get_tracer(service_name)


@contextmanager
def traced_span(name: str, attributes: dict[str, Any] | None = None) -> Iterator[Span]:
    """Run a block inside a span, marking it OK or ERROR by outcome."""
    tracer = get_tracer()
    with tracer.start_as_current_span(
        name, attributes=attributes or {}, record_exception=False, set_status_on_exception=False
    ) as span:
        try:
            yield span
            span.set_status(Status(StatusCode.OK))
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.record_exception(e)
            raise
