# shopcart/api/errors.py
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shopcart.utils.logging import get_logger

logger = get_logger(__name__)

AVAILABLE_ROUTES = {
    "documentation": "/api-docs",
    "health": "/health",
    "cart": "/api/cart",
}


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc.detail, dict):
        body = {"success": False, **exc.detail}
    elif exc.status_code == status.HTTP_404_NOT_FOUND:
        # nothing matched the path
        body = {
            "success": False,
            "error": "Route not found",
            "message": f"The route {request.url.path} was not found",
            "availableRoutes": AVAILABLE_ROUTES,
        }
    else:
        body = {
            "success": False,
            "error": str(exc.detail),
            "message": f"{request.method} {request.url.path}: {exc.detail}",
        }

    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    problems = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err["loc"] if p != "body")
        problems.append(f"{location}: {err['msg']}" if location else err["msg"])

    logger.warning(f"Malformed request {request.method} {request.url.path}: {problems}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "error": "Invalid request",
            "message": "; ".join(problems),
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "error": "Internal server error",
            "message": str(exc),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
