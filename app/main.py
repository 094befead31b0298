# File: app/main.py
import os
import time
import logging
from typing import Callable
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from app.api.v1.api import api_router
from app.api.v1.endpoints import send_email
from app.core.config import settings
from app.db.database import engine

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
)

allowed_origins = settings.allowed_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=allowed_origins != ["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH", "HEAD"],
    allow_headers=["*"],
    expose_headers=["X-Process-Time", "Content-Disposition"],
    max_age=3600,
)


@app.middleware("http")
async def log_requests(request: Request, call_next: Callable) -> Response:
    """Log every request with its status and timing"""
    start_time = time.time()

    try:
        response = await call_next(request)
    except Exception as e:
        process_time = time.time() - start_time
        logger.exception(
            f"{request.method} {request.url.path} - Error: {str(e)} - Time: {process_time:.4f}s"
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": str(e),
                "path": request.url.path,
                "method": request.method
            },
        )

    process_time = time.time() - start_time
    logger.info(
        f"{request.method} {request.url.path} - "
        f"Status: {response.status_code} - "
        f"Time: {process_time:.4f}s"
    )
    response.headers["X-Process-Time"] = str(process_time)
    return response


@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting {settings.PROJECT_NAME}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"API V1 prefix: {settings.API_V1_STR}")
    logger.info(f"Allowed CORS origins: {allowed_origins}")
    if not settings.smtp_configured:
        logger.warning("SMTP credentials missing, /api/send-email will answer 503")
    if not settings.storage_configured:
        logger.warning("Cloudinary not configured, uploads and badges are unavailable")


app.include_router(api_router, prefix=settings.API_V1_STR)
# Relay used by the bulk email sender
app.include_router(send_email.router, prefix="/api", tags=["email-relay"])


@app.get("/")
def read_root():
    return {
        "message": f"Welcome to {settings.PROJECT_NAME}",
        "version": "1.0.0",
        "environment": settings.ENVIRONMENT,
        "docs_url": "/docs",
        "status": "running",
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        database = "connected"
    except Exception as e:
        logger.error(f"Health check database error: {str(e)}")
        database = f"error: {str(e)}"

    return {
        "status": "healthy" if database == "connected" else "unhealthy",
        "environment": settings.ENVIRONMENT,
        "database": database,
        "email_configured": settings.smtp_configured,
        "storage_configured": settings.storage_configured,
        "timestamp": time.time(),
    }


@app.exception_handler(500)
async def internal_error_handler(request: Request, exc: Exception):
    logger.error(f"Internal server error: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": "Something went wrong on our end",
            "status_code": 500
        }
    )


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    host = "0.0.0.0" if settings.is_production else "127.0.0.1"
    uvicorn.run(
        "app.main:app",
        host=host,
        port=port,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.is_development,
    )
