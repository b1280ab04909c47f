"""Observability setup for structured logging, Prometheus metrics and OpenTelemetry tracing."""

import logging
from typing import Optional

import structlog
from opentelemetry import trace
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from prometheus_client import CollectorRegistry, Counter, generate_latest
from sqlalchemy.ext.asyncio import AsyncEngine

from .config import settings

SERVICE_NAME = "airport-booking-core"

# Prometheus metrics
REGISTRY = CollectorRegistry()

BOOKINGS_CREATED = Counter(
    'bookings_created_total',
    'Total bookings created',
    ['cabin_class'],
    registry=REGISTRY
)

BOOKINGS_CANCELLED = Counter(
    'bookings_cancelled_total',
    'Total bookings cancelled',
    registry=REGISTRY
)

BOOKINGS_MODIFIED = Counter(
    'bookings_modified_total',
    'Total bookings modified',
    ['cabin_class'],
    registry=REGISTRY
)

SEATS_RESERVED = Counter(
    'flight_seats_reserved_total',
    'Total seats reserved against flights',
    ['flight_id'],
    registry=REGISTRY
)

SEATS_RELEASED = Counter(
    'flight_seats_released_total',
    'Total seats released back to flights',
    ['flight_id'],
    registry=REGISTRY
)

RESERVATIONS_REJECTED = Counter(
    'flight_reservations_rejected_total',
    'Seat reservations rejected for insufficient capacity',
    ['flight_id'],
    registry=REGISTRY
)

COMPENSATIONS = Counter(
    'booking_compensations_total',
    'Inventory changes reversed after a booking persistence failure',
    ['operation'],
    registry=REGISTRY
)

PASSENGERS_REGISTERED = Counter(
    'passengers_registered_total',
    'Total passengers registered',
    registry=REGISTRY
)


def add_trace_context(logger, method_name, event_dict):
    """Add trace context to log events."""
    span = trace.get_current_span()
    if span and span.is_recording():
        ctx = span.get_span_context()
        event_dict['trace_id'] = format(ctx.trace_id, '032x')
        event_dict['span_id'] = format(ctx.span_id, '016x')
    return event_dict


def setup_structured_logging(log_level: Optional[str] = None) -> None:
    """
    Configure structlog and route stdlib ``logging`` records through it.

    Service modules log with ``logging.getLogger(__name__)`` and ``extra=``
    fields; those fields end up as keys of the rendered event.
    """
    level = getattr(logging, (log_level or settings.log_level).upper())
    renderer = structlog.dev.ConsoleRenderer() if settings.debug else structlog.processors.JSONRenderer()
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        add_trace_context,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[*shared_processors, structlog.stdlib.ExtraAdder()],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)


def setup_tracing(app_name: str = SERVICE_NAME) -> trace.Tracer:
    """Setup OpenTelemetry tracing."""
    resource = Resource.create({
        "service.name": app_name,
        "service.version": "1.0.0",
        "environment": settings.environment,
    })

    provider = TracerProvider(resource=resource)

    # Setup OTLP exporter (if OTLP endpoint is configured)
    if settings.otlp_endpoint:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otlp_endpoint)))

    trace.set_tracer_provider(provider)
    return trace.get_tracer(__name__)


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Instrument a SQLAlchemy async engine with OpenTelemetry."""
    SQLAlchemyInstrumentor().instrument(engine=engine.sync_engine)


def get_tracer(name: str) -> trace.Tracer:
    """Return a tracer; spans are no-ops until ``setup_tracing`` has run."""
    return trace.get_tracer(name)


def get_logger(name: str):
    """Get a structlog logger bound to ``name``."""
    return structlog.get_logger(name)


class MetricsCollector:
    """Collector for business metrics."""

    @staticmethod
    def record_booking_created(cabin_class: str):
        """Record a booking creation."""
        BOOKINGS_CREATED.labels(cabin_class=cabin_class).inc()

    @staticmethod
    def record_booking_cancelled():
        """Record a booking cancellation."""
        BOOKINGS_CANCELLED.inc()

    @staticmethod
    def record_booking_modified(cabin_class: str):
        """Record a booking modification."""
        BOOKINGS_MODIFIED.labels(cabin_class=cabin_class).inc()

    @staticmethod
    def record_seats_reserved(flight_id: str, seats: int):
        """Record seats taken from a flight."""
        SEATS_RESERVED.labels(flight_id=flight_id).inc(seats)

    @staticmethod
    def record_seats_released(flight_id: str, seats: int):
        """Record seats returned to a flight."""
        SEATS_RELEASED.labels(flight_id=flight_id).inc(seats)

    @staticmethod
    def record_reservation_rejected(flight_id: str):
        """Record a reservation refused for lack of capacity."""
        RESERVATIONS_REJECTED.labels(flight_id=flight_id).inc()

    @staticmethod
    def record_compensation(operation: str):
        """Record a reversed inventory change."""
        COMPENSATIONS.labels(operation=operation).inc()

    @staticmethod
    def record_passenger_registered():
        """Record a passenger registration."""
        PASSENGERS_REGISTERED.inc()


def get_prometheus_metrics() -> bytes:
    """Render the business metrics in Prometheus text format."""
    return generate_latest(REGISTRY)


# Global metrics collector instance
metrics_collector = MetricsCollector()
