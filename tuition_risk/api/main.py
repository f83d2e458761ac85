"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from tuition_risk.api.middleware import RequestIDMiddleware, MetricsMiddleware
from tuition_risk.api.v1 import classification, prediction
from tuition_risk.infrastructure.observability.logging import setup_logging
from tuition_risk.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Tuition Risk Engine",
        description="Student financial-risk classification and prediction service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name, "ai_enabled": settings.use_ai}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(classification.router, prefix="/v1", tags=["classification"])
    app.include_router(prediction.router, prefix="/v1", tags=["prediction"])

    return app


app = create_app()
