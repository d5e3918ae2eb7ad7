import json
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from csa_market.core.db import init_db
from csa_market.core.logging import setup_logging
from csa_market.core.settings import get_settings
from csa_market.routers import api

# Initialize
settings = get_settings()
logger = setup_logging()

# Create app
app = FastAPI(
    title=settings.app_name,
    version="1.0.0",
    description="Community Supported Agriculture marketplace: farms and CSA shares",
)


def _serialize_validation_errors(errors: list) -> list:
    """Convert validation errors to JSON-serializable format."""
    serialized = []
    for error in errors:
        serialized_error = {
            "loc": error.get("loc"),
            "msg": str(error.get("msg", "")),
            "type": error.get("type"),
        }
        if "input" in error:
            try:
                json.dumps(error["input"])
                serialized_error["input"] = error["input"]
            except (TypeError, ValueError):
                serialized_error["input"] = str(error["input"])
        serialized.append(serialized_error)
    return serialized


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log and return request validation failures (422)."""
    errors = _serialize_validation_errors(exc.errors())
    logger.warning(
        f"Validation error on {request.method} {request.url.path}",
        extra={
            "operation": "request_validation",
            "context_data": {"query": dict(request.query_params), "errors": errors},
        },
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": errors},
    )


# Request logging middleware with timing
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all incoming HTTP requests with timing information."""
    start_time = time.perf_counter()

    logger.info(f">>> {request.method} {request.url.path}")
    logger.debug(f"    Client: {request.client.host if request.client else 'unknown'}")

    response = await call_next(request)

    duration_ms = (time.perf_counter() - start_time) * 1000
    response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"

    method = request.method
    path = request.url.path
    status_code = response.status_code
    time_str = f"{duration_ms:.2f}ms"

    if duration_ms < 100:
        logger.info(f"<<< {method} {path} - {status_code} [{time_str}]")
    elif duration_ms < 500:
        logger.info(f"<<< {method} {path} - {status_code} [{time_str}] (slow)")
    else:
        logger.warning(f"<<< {method} {path} - {status_code} [{time_str}] (very slow)")

    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api.router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    """Initialize services on startup."""
    logger.info("Starting up...")
    init_db()


@app.get("/health", tags=["health"])
async def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
