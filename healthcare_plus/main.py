from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
import time
import logging

from .api.pages import router as pages_router
from .api.v1.auth import router as auth_router
from .api.v1.dashboard import router as dashboard_router
from .api.v1.doctors import router as doctors_router
from .api.v1.signup import router as signup_router
from .core.backend import Backend
from .core.config import settings
from .core.security import PortalError

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    description="Patient and doctor appointment portal",
    openapi_url="/api/v1/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Middleware setup
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Host checks are skipped under test
if not settings.TESTING:
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)

# Custom middleware for request logging and timing
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    # Log request
    logger.info(
        f"{request.method} {request.url.path} - "
        f"Status: {response.status_code} - "
        f"Time: {process_time:.4f}s"
    )

    return response

# Exception handlers
@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.title,
            "message": exc.detail,
            "variant": "destructive"
        },
        headers=exc.headers
    )

@app.exception_handler(404)
async def not_found_handler(request: Request, exc: HTTPException):
    # Status handlers win over class handlers, so portal 404s arrive here too
    if isinstance(exc, PortalError):
        return await portal_error_handler(request, exc)

    return JSONResponse(
        status_code=404,
        content={
            "error": "Not Found",
            "message": "The requested resource was not found",
            "path": str(request.url.path)
        }
    )

@app.exception_handler(500)
async def internal_error_handler(request: Request, exc: Exception):
    logger.error(f"Internal server error on {request.url.path}: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Error",
            "message": "An unexpected error occurred. Please try again.",
            "variant": "destructive"
        }
    )

# Include routers
app.include_router(pages_router)
app.include_router(auth_router, prefix="/api/v1")
app.include_router(signup_router, prefix="/api/v1")
app.include_router(dashboard_router, prefix="/api/v1")
app.include_router(doctors_router, prefix="/api/v1")

# Startup and shutdown events
@app.on_event("startup")
async def startup_event():
    """Initialize application on startup."""
    logger.info("Starting HealthCare+ Portal...")

    # Tests may provide a transport standing in for the hosted backend
    transport = getattr(app.state, "gateway_transport", None)
    app.state.backend = Backend(transport=transport)
    await app.state.backend.start()

    logger.info("Application startup complete")

@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on application shutdown."""
    logger.info("Shutting down HealthCare+ Portal...")
    await app.state.backend.close()

# Health check endpoint
@app.get("/health")
async def health_check():
    """Liveness plus whether the session provider is ready."""
    sessions = app.state.backend.sessions
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "version": settings.VERSION,
        "sessions": "loading" if sessions.loading else "ready",
        "open_drafts": len(app.state.backend.drafts)
    }

# API Info endpoint
@app.get("/api/v1/info")
async def api_info():
    """API information endpoint."""
    return {
        "name": settings.APP_NAME,
        "version": settings.VERSION,
        "endpoints": {
            "authentication": "/api/v1/auth",
            "signup": "/api/v1/signup",
            "dashboard": "/api/v1/dashboard",
            "doctors": "/api/v1/doctors",
            "docs": "/docs",
            "openapi": "/api/v1/openapi.json"
        }
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "healthcare_plus.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="info"
    )
