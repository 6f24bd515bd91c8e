"""Main FastAPI application for the storefront"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from typing import Optional
import logging

from app.core.config import settings
from app.core.exceptions import QuickCartException
from app.core.storefront import Storefront

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

def create_app(storefront: Optional[Storefront] = None) -> FastAPI:
    """Build the API around a storefront; one is created from settings if omitted"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        logger.info("Starting up QuickCart storefront...")
        instance = storefront or Storefront(settings)
        await instance.startup()
        app.state.storefront = instance

        yield

        logger.info("Shutting down QuickCart storefront...")
        await instance.shutdown()
        app.state.storefront = None

    app = FastAPI(
        title=settings.APP_NAME,
        description="QuickCart storefront API: catalog, cart, wishlist and checkout",
        version=settings.APP_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(QuickCartException)
    async def quickcart_exception_handler(request: Request, exc: QuickCartException):
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "code": exc.error_code,
                    "message": exc.detail
                }
            },
            headers=exc.headers
        )

    from app.api import api_router
    app.include_router(api_router, prefix="/api/v1")

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "version": settings.APP_VERSION}

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )
