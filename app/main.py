"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from datetime import UTC, datetime

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1 import router as v1_router
from app.core.config import settings
from app.core.logging_config import configure_logging
from app.graphql import graphql_router
from app.schemas.health import RootResponse

configure_logging()

app = FastAPI(
    title="Book Catalog API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.CORS_ORIGIN],
    allow_credentials=settings.CORS_ORIGIN != "*",
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(v1_router, prefix=settings.API_V1_PREFIX)
app.include_router(graphql_router, prefix=settings.GRAPHQL_PATH, tags=["graphql"])


@app.get("/", response_model=RootResponse)
def root() -> RootResponse:
    """Root route; minimal payload for discovery."""
    return RootResponse(
        message="Book Catalog API",
        graphql=settings.GRAPHQL_PATH,
        timestamp=datetime.now(UTC),
    )
