"""
Author: Charm
Copyright (c) 2025, All Rights Reserved.
"""

from typing import List

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException

from api.api_auth import router as auth
from utils.auth_settings import AuthSettings, get_auth_settings, missing_settings
from utils.be_config import AUTH_API_PREFIX, SERVICE_NAME
from utils.error_handler import ErrorMessages, ErrorResponse
from utils.logger import logger

app = FastAPI(
    title="LDAP Auth API",
    description="LDAP authentication gateway issuing JWT redirects",
    version="1.0.0",
)

auth_settings = get_auth_settings()


def report_incomplete_settings(settings: AuthSettings) -> List[str]:
    """Log every setting a login cannot succeed without; logins then fail with 500."""
    missing = missing_settings(settings)
    for name in missing:
        logger.warning("Configuration incomplete: {} is not set", name)
    return missing


report_incomplete_settings(auth_settings)


@app.exception_handler(HTTPException)
async def handle_http_exception(request: Request, exc: HTTPException):
    """
    Log and return standard HTTP errors (e.g., 404, 405) without leaking
    stack traces.
    """
    logger.warning(
        "HTTP error {} on {} {}: {}",
        exc.status_code,
        request.method,
        request.url.path,
        exc.detail,
    )
    error = (
        exc.detail
        if isinstance(exc.detail, str)
        else ErrorResponse.phrase(exc.status_code)
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": error},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def handle_unexpected_exception(request: Request, exc: Exception):
    """Catch-all for unexpected errors with structured logging."""
    logger.opt(exception=exc).error(
        "Unhandled error on {} {}", request.method, request.url.path
    )
    return ErrorResponse.internal_server_error(ErrorMessages.SERVER_ERROR).to_response()


@app.middleware("http")
async def add_service_marker(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Auth-Service"] = SERVICE_NAME
    return response


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return JSONResponse(content={"status": "healthy", "service": SERVICE_NAME})


@app.get("/")
def read_root():
    """Send browsers on to the application."""
    return RedirectResponse(url=auth_settings.APP_URL, status_code=302)


# add api routers
app.include_router(auth, prefix=AUTH_API_PREFIX, tags=["auth"])

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app:app", host="0.0.0.0", port=7120, workers=2)
