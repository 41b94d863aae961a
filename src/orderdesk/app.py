from contextlib import asynccontextmanager
import logging
from typing import Optional

import air
from air.responses import JSONResponse
from fastapi import Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware

from orderdesk.event_broker import EventBroker
from orderdesk.exceptions import OrderDeskError
from orderdesk.logging_config import setup_logging
from orderdesk.middleware import RequestLoggingMiddleware
from orderdesk.routes.customers import router as customer_router
from orderdesk.routes.order_products import router as order_product_router
from orderdesk.routes.orders import router as order_router
from orderdesk.routes.products import router as product_router
from orderdesk.routes.stream import router as stream_router
from orderdesk.routes.users import router as user_router
from orderdesk.settings import Settings
from orderdesk.settings import settings as default_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    logger.info("orderdesk started (%s)", app.state.settings.environment)
    yield
    app.state.broker.close()
    logger.info("orderdesk stopped")


async def orderdesk_error_handler(request: Request, exc: OrderDeskError):
    return JSONResponse({"error": exc.error_type, "message": exc.message}, status_code=exc.status_code)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        {"detail": exc.detail}, status_code=exc.status_code, headers=getattr(exc, "headers", None)
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled error on %s %s",
        request.method,
        request.url.path,
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    return JSONResponse(
        {"error": "internal_error", "message": "Internal server error"}, status_code=500
    )


def create_app(settings: Optional[Settings] = None) -> air.Air:
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_format)

    app = air.Air(lifespan=lifespan)
    app.state.settings = settings
    app.state.broker = EventBroker(
        keep_alive_interval=settings.sse_keep_alive_interval,
        write_timeout=settings.sse_write_timeout,
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # JSON everywhere, including unknown routes and missing rows.
    app.add_exception_handler(OrderDeskError, orderdesk_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(404, http_error_handler)
    app.add_exception_handler(500, unhandled_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(customer_router)
    app.include_router(product_router)
    app.include_router(user_router)
    app.include_router(order_router)
    app.include_router(order_product_router)
    app.include_router(stream_router)

    @app.get("/healthz")
    def healthz():
        return JSONResponse({"ok": True})

    return app


app = create_app()
