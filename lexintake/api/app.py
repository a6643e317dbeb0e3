import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    content = {"error": exc.base_error.message}
    if exc.base_error.details is not None:
        content["details"] = exc.base_error.details
    logger.warning(
        f"Client error {exc.status_code} on {request.method} {request.url.path}: "
        f"{exc.base_error.code} {exc.base_error.reason or ''}".rstrip()
    )
    return JSONResponse(
        status_code=exc.status_code, content=jsonable_encoder(content), headers=exc.headers or None
    )


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(
        f"Server error {exc.status_code} on {request.method} {request.url.path}: "
        f"{exc.base_error.code} {exc.base_error.message}"
    )
    if exc.status_code == status.HTTP_503_SERVICE_UNAVAILABLE:
        content = {"error": exc.base_error.message}
        if exc.base_error.details is not None:
            content["details"] = exc.base_error.details
    else:
        content = {"error": "Internal server error"}
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(content))


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {"field": ".".join(str(p) for p in err.get("loc", ()) if p != "body"), "message": err.get("msg")}
        for err in exc.errors()
    ]
    logger.warning(f"Validation failed on {request.method} {request.url.path}: {details}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"error": "Validation failed", "details": details}),
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Unexpected error"},
    )


def create_app(ApplicationConfig) -> FastAPI:
    logging.basicConfig(
        level=getattr(logging, str(ApplicationConfig.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="LexIntake API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from lexintake.api.routes import (
        aml,
        audit,
        auth,
        clients,
        external,
        firms,
        gdpr,
        health_check,
        internal,
        leads,
        matters,
    )

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(clients.router, tags=["Clients"])
    app.include_router(matters.router, tags=["Matters"])
    app.include_router(leads.router, tags=["Leads"])
    app.include_router(leads.public_router, tags=["Leads"])
    app.include_router(audit.router, tags=["Audit"])
    app.include_router(external.router, tags=["External"])
    app.include_router(aml.router, tags=["AML"])
    app.include_router(gdpr.router, tags=["GDPR"])
    app.include_router(gdpr.external_router, tags=["GDPR"])
    app.include_router(firms.router, tags=["Firms"])
    app.include_router(internal.router, tags=["Internal"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
