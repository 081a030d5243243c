import structlog
from django.conf import settings
from django.core.cache import cache
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver
from django_structlog.signals import bind_extra_request_metadata
from opentelemetry import trace

from src.catalog.models import Product
from src.catalog.services import cache_key

logger = structlog.get_logger()


@receiver(bind_extra_request_metadata)
def add_otel_trace_id(request, logger, **kwargs):
    """Bind the OTel trace id and service name to every request log."""
    span_context = trace.get_current_span().get_span_context()

    if span_context.is_valid:
        structlog.contextvars.bind_contextvars(
            trace_id=format(span_context.trace_id, "032x"),
            service=settings.SERVICE_NAME,
        )


@receiver(post_save, sender=Product)
@receiver(post_delete, sender=Product)
def evict_cached_product(sender, instance, **kwargs):
    """Drop the cached copy on any write, including admin and ORM ones."""
    cache.delete(cache_key(instance.pk))
    logger.debug("product_cache_evicted", product_id=str(instance.pk))
