from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = Field(default="ok", description="Service status")
    version: str
    credentials_configured: bool = Field(
        default=False, description="Whether an LTA DataMall AccountKey is available"
    )
