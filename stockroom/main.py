"""
Stockroom - FastAPI Application
Customer signup, login and profile provisioning for the inventory front-end
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import os
from contextlib import asynccontextmanager

from stockroom.routes import auth
from stockroom.utils.config import get_app_config, get_supabase_config, validate_configuration
from stockroom.utils.logger import init_logging
from stockroom.utils.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    # Startup
    init_logging()
    logger.info("Stockroom starting up...")

    validate_configuration()
    supabase_config = get_supabase_config()

    # One provider connection for the process, injected into routes via dependencies
    supabase = SupabaseClient(supabase_config.supabase_url, supabase_config.supabase_anon_key)
    await supabase.start()
    app.state.supabase = supabase

    logger.info("Stockroom startup complete")

    yield

    # Shutdown
    logger.info("Stockroom shutting down...")
    await supabase.stop()


app_config = get_app_config()

# Create FastAPI application
app = FastAPI(
    title="Stockroom",
    description="Account signup and login for the Stockroom inventory manager",
    version=app_config.service_version,
    lifespan=lifespan,
    debug=app_config.debug,
    docs_url=app_config.docs_url,
    redoc_url="/redoc"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=app_config.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global exception handler
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    """Custom HTTP exception handler"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "message": exc.detail,
            "status_code": exc.status_code
        }
    )


# Health check endpoint
@app.get("/health")
async def health_check():
    """Service health check"""
    supabase = getattr(app.state, 'supabase', None)
    return {
        "status": "healthy",
        "service": app_config.service_name,
        "version": app_config.service_version,
        "provider": "connected" if supabase is not None and supabase.is_available() else "not configured"
    }


@app.get("/api/config")
async def get_runtime_config():
    """Runtime configuration for the browser (public values only)"""
    supabase_config = get_supabase_config()
    return {
        "SUPABASE_URL": supabase_config.supabase_url,
        "SUPABASE_ANON_KEY": supabase_config.supabase_anon_key,
        "ENVIRONMENT": os.getenv('ENVIRONMENT', 'development'),
        "VERSION": app_config.service_version,
        "ROUTES": {
            "login": "/login",
            "signup": "/signup",
            "dashboard": "/dashboard"
        }
    }


# Include routers
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "Stockroom",
        "version": app_config.service_version,
        "description": "Customer signup, login and profile provisioning",
        "docs": app_config.docs_url
    }
