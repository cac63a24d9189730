# =============================================================================
# PEDIDOS v1.0 - FASTAPI MAIN
# =============================================================================
# Main FastAPI application
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from .config import config
from .database_pg import init_pool, close_pool, ping
from .exceptions import AppException, InternalError, OrderValidationError
from .routers import orders


logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger("pedidos")


# =============================================================================
# LIFESPAN - Startup/Shutdown
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the connection pool on startup, close it on shutdown."""
    logger.info("%s v%s - starting", config.APP_NAME, config.VERSION)
    if not config.TESTING:
        init_pool()

    yield

    close_pool()
    logger.info("%s - stopped", config.APP_NAME)


# =============================================================================
# APP FASTAPI
# =============================================================================

app = FastAPI(
    title="RIP Pedidos API",
    description="Order resource: header, items, authorized trucks and drivers",
    version=config.VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=r"https?://.*",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# ROUTERS
# =============================================================================

app.include_router(orders.router, prefix=config.API_PREFIX, tags=["Orders"])


# =============================================================================
# ROOT ENDPOINTS
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """Application info."""
    return {
        "app": config.APP_NAME,
        "version": config.VERSION,
        "status": "running",
        "docs": "/docs",
        "api": config.API_PREFIX
    }


@app.get("/health", tags=["Root"])
def health_check():
    """Health check: the database must answer."""
    if ping():
        return {"status": "healthy", "database": "connected"}
    return JSONResponse(
        status_code=503,
        content={"status": "unhealthy", "database": "unreachable"}
    )


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(OrderValidationError)
async def order_validation_handler(request: Request, exc: OrderValidationError):
    """Schema failures: JSON list of field errors."""
    return JSONResponse(status_code=exc.status_code, content=exc.errors)


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """Domain errors: short plain-text message."""
    if exc.status_code >= 500:
        logger.error("%s %s -> %s", request.method, request.url.path, exc.to_dict())
    return PlainTextResponse(exc.detail, status_code=exc.status_code)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Unhandled errors: logged with traceback, generic message to the client."""
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return PlainTextResponse(InternalError.detail, status_code=500)


# =============================================================================
# RUN (development)
# =============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "pedidos.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
