"""
Application factory and FastAPI app configuration.
"""

import logging
import os
import time

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from deal_service.api.router import router as api_router
from deal_service.sources import DealSourceFactory

logger = logging.getLogger("deal_service")


def configure_logging() -> None:
    """Root logging from ``LOG_LEVEL`` (default INFO)."""
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def log_requests(request: Request, call_next):
    logger.info(f"Incoming request: {request.method} {request.url.path}")
    start_time = time.time()
    try:
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        logger.info(
            f"Request completed: {request.method} {request.url.path} "
            f"Status: {response.status_code} Time: {process_time:.4f}s"
        )
        return response
    except Exception as e:
        logger.error(f"Request failed: {request.method} {request.url.path} Error: {str(e)}")
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal Server Error"},
        )


async def log_validation_error(request: Request, exc: RequestValidationError):
    # loc is ("body", "<form key>") for deal form fields
    fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
    logger.warning(f"Rejected deal form on {request.url.path}: invalid fields {fields}")
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors())})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    configure_logging()
    application = FastAPI(
        title="Deal Evaluator API",
        version="0.1.0",
        description="REST API for small business acquisition metrics and deal recommendations",
    )

    application.include_router(api_router)
    application.middleware("http")(log_requests)
    application.add_exception_handler(RequestValidationError, log_validation_error)

    @application.get("/")
    def read_root():
        return {
            "message": "Deal Evaluator API is running",
            "sources": DealSourceFactory.available(),
        }

    return application


# Module-level app instance for uvicorn
app = create_app()
