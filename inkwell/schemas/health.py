"""Health check response."""

from typing import Literal

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: Literal["ok", "degraded"]
    environment: str
    database: Literal["connected", "disconnected"]
    uploads: Literal["writable", "unavailable"]
