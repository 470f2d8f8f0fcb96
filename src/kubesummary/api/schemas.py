# src/kubesummary/api/schemas.py
"""
Pydantic response schemas for the JSON endpoints.
Metric endpoints answer in the Prometheus text format and have no schema.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str = Field(..., description="Health status of the exporter.")
    version: str = Field(..., description="Current application version.")
