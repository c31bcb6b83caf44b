import logging
import os
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

import config
from database import check_connection, get_session_context, init_db
from exceptions import HostelError
from logging_config import generate_request_id, set_request_id, setup_logging
from rate_limiter import limiter, rate_limit_exceeded_handler
from routers import (
    auth_router,
    payments_router,
    rooms_router,
    superadmin_router,
    tenants_router,
    tickets_router,
    uploads_router,
)
from services.seed_service import seed_defaults

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config.check_environment()
    if not check_connection():
        logger.error("Database is unreachable; requests will fail until it is back")
    if config.AUTO_CREATE_TABLES:
        init_db()
    if config.SEED_DEFAULTS:
        with get_session_context() as db:
            seed_defaults(db)
    logger.info("RootnSpace API ready on port %s", config.PORT)
    yield


# App instance
app = FastAPI(
    title="RootnSpace Hostel Management API",
    description="Hostel / PG management: hostels, rooms, tenant onboarding and approval, payments, tickets.",
    version="1.0.0",
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount static uploads
os.makedirs(config.UPLOAD_DIR, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=config.UPLOAD_DIR), name="uploads")


# Error handlers
@app.exception_handler(HostelError)
async def hostel_error_handler(request: Request, exc: HostelError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        message = str(error.get("msg", "Invalid value"))
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        errors.append({"field": field, "message": message})
    detail = errors[0]["message"] if errors else "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail, "errors": errors})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    if exc.status_code == status.HTTP_404_NOT_FOUND and detail == "Not Found":
        detail = "Route not found"
    return JSONResponse(status_code=exc.status_code, content={"detail": detail}, headers=exc.headers)


# Request logging and 500 fallback
@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or generate_request_id()
    set_request_id(request_id)
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
            headers={"X-Request-ID": request_id},
        )
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
    response.headers["X-Request-ID"] = request_id
    return response


@app.get("/health", tags=["system"])
@limiter.exempt
def health():
    return {"status": "ok", "database": "connected" if check_connection() else "unavailable"}


@app.get("/api/test", tags=["system"])
def api_test():
    return {"message": "RootnSpace API is running"}


app.include_router(auth_router)
app.include_router(tenants_router)
app.include_router(rooms_router)
app.include_router(superadmin_router)
app.include_router(payments_router)
app.include_router(tickets_router)
app.include_router(uploads_router)

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=config.PORT, reload=True)
