import logging
import os
import uuid
from importlib.metadata import PackageNotFoundError, version

import structlog
from opentelemetry import metrics, trace
from opentelemetry._logs import get_logger_provider, set_logger_provider
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.django import DjangoInstrumentor
from opentelemetry.instrumentation.psycopg import PsycopgInstrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import (
    DEPLOYMENT_ENVIRONMENT,
    SERVICE_INSTANCE_ID,
    SERVICE_NAME,
    SERVICE_VERSION,
    Resource,
)
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

DIST_NAME = "product-catalog-service"

_IS_INITIALIZED = False


class OTLPLogHandler(LoggingHandler):
    def __init__(self, level=logging.NOTSET):
        super().__init__(level=level, logger_provider=get_logger_provider())


def service_version() -> str:
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        return "0.0.0"


def add_otel_context(_, __, event_dict):
    span_context = trace.get_current_span().get_span_context()

    if span_context.is_valid:
        event_dict["trace_id"] = format(span_context.trace_id, "032x")
        event_dict["span_id"] = format(span_context.span_id, "016x")

    return event_dict


def filter_request_logs(_, __, event_dict):
    # django-structlog emits these for every request; spans already cover them
    if event_dict.get("event") in ["request_started", "request_finished"]:
        raise structlog.DropEvent
    return event_dict


def recursive_stringify(value):
    """
    Recursively converts complex objects (UUID, Decimal, datetime) to strings.
    Basic JSON types pass through unchanged.
    """
    if isinstance(value, (str, int, float, bool, type(None))):
        return value

    if isinstance(value, (list, tuple)):
        return [recursive_stringify(v) for v in value]

    if isinstance(value, dict):
        return {k: recursive_stringify(v) for k, v in value.items()}

    try:
        return str(value)
    except Exception:
        return repr(value)


def sanitize_for_serialization(_, __, event_dict):
    """Structlog processor making every event value safe for the OTLP exporter."""
    return {k: recursive_stringify(v) for k, v in event_dict.items()}


def build_resource(service_name: str) -> Resource:
    return Resource.create(
        {
            SERVICE_NAME: service_name,
            SERVICE_INSTANCE_ID: str(uuid.uuid4()),
            DEPLOYMENT_ENVIRONMENT: os.getenv("APP_ENV", "development"),
            SERVICE_VERSION: service_version(),
        }
    )


def configure_structlog():
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            add_otel_context,
            filter_request_logs,
            sanitize_for_serialization,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def init_telemetry(service_name: str):
    """Set up OTLP traces, metrics and logs once per process."""
    global _IS_INITIALIZED
    if _IS_INITIALIZED:
        return

    resource = build_resource(service_name)
    endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://otel-collector:4317")

    tracer_provider = TracerProvider(resource=resource)
    tracer_provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint, insecure=True))
    )
    trace.set_tracer_provider(tracer_provider)

    metric_reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=endpoint, insecure=True)
    )
    metrics.set_meter_provider(
        MeterProvider(resource=resource, metric_readers=[metric_reader])
    )

    logger_provider = LoggerProvider(resource=resource)
    set_logger_provider(logger_provider)
    logger_provider.add_log_record_processor(
        BatchLogRecordProcessor(OTLPLogExporter(endpoint=endpoint, insecure=True))
    )

    DjangoInstrumentor().instrument()
    PsycopgInstrumentor().instrument(enable_commenter=True)
    RedisInstrumentor().instrument()

    configure_structlog()

    _IS_INITIALIZED = True
