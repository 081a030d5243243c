from typing import List
from uuid import UUID

import structlog
from django.core.cache import cache
from django.db import connections
from ninja import NinjaAPI, Router
from opentelemetry import trace
from opentelemetry.trace import StatusCode

from src.catalog.controller import ProductController
from src.catalog.errors import ProductNotFound
from src.catalog.schema import ErrorOut, ProductIn, ProductOut

api = NinjaAPI(title="Product Catalog API")
logger = structlog.get_logger()


@api.get("/healthz/live")
def liveness(request):
    """Is the process alive?"""
    logger.info("liveness_check_triggered")
    return {"status": "ok"}


@api.get("/healthz/ready")
def readiness(request):
    """Are dependencies (DB, cache) reachable?"""
    logger.info("readiness_check_triggered")

    try:
        db_conn = connections["default"]
        db_conn.cursor()
    except Exception as e:
        logger.error(
            "readiness_check_failed_db",
            error=str(e),
        )
        return api.create_response(
            request,
            {
                "status": "unready",
                "reason": "db",
            },
            status=503,
        )

    try:
        cache.get("healthcheck")
    except Exception as e:
        logger.error(
            "readiness_check_failed_cache",
            error=str(e),
        )
        return api.create_response(
            request,
            {
                "status": "unready",
                "reason": "cache",
            },
            status=503,
        )

    return {"status": "ready"}


@api.get("/health")
def health_alias(request):
    return liveness(request)


@api.exception_handler(ProductNotFound)
def on_product_not_found(request, exc):
    logger.info(
        "product_not_found",
        product_id=str(exc.product_id),
        path=request.path,
    )
    return api.create_response(
        request,
        {"error": "Not Found"},
        status=404,
    )


@api.exception_handler(Exception)
def on_exception(request, exc):
    span = trace.get_current_span()

    # Mark the Trace as "Error" so it turns red in the UI
    span.set_status(StatusCode.ERROR, description=str(exc))
    span.record_exception(exc)

    logger.error(
        "unhandled_api_exception",
        path=request.path,
        error=str(exc),
        exc_info=True,
    )

    return api.create_response(
        request,
        {
            "error": "Internal Server Error",
            "trace_id": format(span.get_span_context().trace_id, "032x"),
        },
        status=500,
    )


def build_product_router(controller: ProductController) -> Router:
    """Register the product routes, bound to ``controller``."""
    router = Router(tags=["products"])

    @router.get("/products", response=List[ProductOut])
    def list_products(request):
        return controller.get_all_products()

    @router.post("/products", response=ProductOut)
    def create_product(request, data: ProductIn):
        return controller.create_product(data)

    @router.get("/products/{product_id}", response={200: ProductOut, 404: ErrorOut})
    def get_product(request, product_id: UUID):
        return controller.get_product(product_id)

    @router.put("/products/{product_id}", response={200: ProductOut, 404: ErrorOut})
    def update_product(request, product_id: UUID, data: ProductIn):
        return controller.update_product(product_id, data)

    @router.delete("/products/{product_id}", response={204: None, 404: ErrorOut})
    def delete_product(request, product_id: UUID):
        controller.delete_product(product_id)
        return 204, None

    return router
