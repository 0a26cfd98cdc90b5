from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Human-readable failure message")


class HealthResponse(BaseModel):
    status: str = "ok"
