# shopcart/api/__init__.py
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from shopcart.api.errors import register_exception_handlers
from shopcart.api.routers.cart import router as cart_router
from shopcart.api.routers.health import router as health_router
from shopcart.domain.cart import Cart, DuplicatePolicy
from shopcart.utils.logging import get_logger, setup_logging
from shopcart.utils.settings import (
    APP_NAME,
    APP_VERSION,
    CART_DUPLICATE_POLICY,
    CORS_ORIGINS,
    LOG_LEVEL,
)

logger = get_logger(__name__)

# helmet's default response headers
SECURITY_HEADERS = {
    "Content-Security-Policy": "default-src 'self';base-uri 'self';font-src 'self' https: data:;"
    "form-action 'self';frame-ancestors 'self';img-src 'self' data:;object-src 'none';"
    "script-src 'self';script-src-attr 'none';style-src 'self' https: 'unsafe-inline';"
    "upgrade-insecure-requests",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}

# Swagger UI loads its assets from a CDN, so the docs page gets no CSP.
DOCS_PATHS = ("/api-docs", "/docs/oauth2-redirect")


def create_app(cart: Cart | None = None) -> FastAPI:
    """
    Build the application together with the cart it serves.

    Each call gets its own cart unless one is passed in, so tests can
    start from an empty cart by building a fresh app.
    """
    setup_logging(LOG_LEVEL)

    app = FastAPI(
        title=APP_NAME,
        version=APP_VERSION,
        description="REST API for managing a shopping cart",
        docs_url="/api-docs",
        openapi_tags=[
            {"name": "Cart", "description": "Operations on the shopping cart"},
        ],
    )
    app.state.cart = cart if cart is not None else Cart(DuplicatePolicy(CART_DUPLICATE_POLICY))
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({elapsed_ms:.1f} ms)"
        )
        return response

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            if name == "Content-Security-Policy" and request.url.path.startswith(DOCS_PATHS):
                continue
            response.headers.setdefault(name, value)
        return response

    register_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(cart_router)

    logger.info(f"App created, duplicate policy: {app.state.cart.duplicate_policy.value}")
    return app
