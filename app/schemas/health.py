"""Pydantic schemas for health check responses."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for the health check endpoint."""

    status: Literal["healthy"] = Field(default="healthy", description="Service status")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    timestamp: datetime = Field(description="Server time (UTC) when the check ran")
    uptime: float = Field(description="Seconds since the process started")
    database: Literal["connected", "disconnected"] | None = Field(
        default=None,
        description="Database connectivity status when check is performed",
    )


class RootResponse(BaseModel):
    """Discovery payload served at '/'."""

    message: str
    status: Literal["running"] = "running"
    graphql: str = Field(description="Path of the GraphQL endpoint")
    timestamp: datetime
