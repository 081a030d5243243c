import structlog
from django.utils.deprecation import MiddlewareMixin
from opentelemetry import trace

logger = structlog.get_logger()


class TraceHeaderMiddleware(MiddlewareMixin):
    """
    Binds the active OpenTelemetry trace to the structlog context
    and echoes the trace id back in an ``X-Trace-Id`` response header.
    """

    def process_request(self, request):
        span_context = trace.get_current_span().get_span_context()

        if span_context.is_valid:
            structlog.contextvars.bind_contextvars(
                trace_id=format(span_context.trace_id, "032x"),
                path=request.path,
                method=request.method,
                user_agent=request.META.get(
                    "HTTP_USER_AGENT",
                    "unknown",
                ),
            )

    def process_response(self, request, response):
        span_context = trace.get_current_span().get_span_context()

        if span_context.is_valid:
            response["X-Trace-Id"] = format(span_context.trace_id, "032x")

        return response
