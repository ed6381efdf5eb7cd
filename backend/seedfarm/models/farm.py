"""
Farm API Models
===============
Pydantic models for the request bodies this project builds or receives.

The remote n8n service owns every payload shape. These models only describe
what we SEND (or accept on the proxy) so the Swagger page and editors have
something to show; responses are never parsed into models and pass through
as plain JSON.

Author: SeedFarm Team
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# CLIENT REQUEST BODIES
# =============================================================================

class YieldPredictionParams(BaseModel):
    """
    Environment data for POST /yield-prediction.

    Only temperature and humidity are required by the remote workflow.
    Unknown extra keys are kept and forwarded as-is.

    Example:
        {
            "temperature": 25.5,
            "humidity": 70,
            "co2": 800,
            "facility_type": "비닐",
            "area": 1000
        }
    """
    model_config = ConfigDict(extra="allow")

    temperature: float = Field(..., description="Average temperature (°C)")
    humidity: float = Field(..., description="Average relative humidity (%)")
    co2: Optional[float] = Field(default=None, description="CO2 concentration (ppm)")
    ec: Optional[float] = Field(default=None, description="EC value (dS/m)")
    ph: Optional[float] = Field(default=None, description="pH value")
    facility_type: Optional[str] = Field(
        default=None,
        description="Greenhouse type",
        examples=["비닐", "유리"]
    )
    area: Optional[float] = Field(default=None, description="Cultivation area (m²)")


class DiaryEntry(BaseModel):
    """Farm diary entry for POST /app/diary."""
    model_config = ConfigDict(extra="allow")

    date: str = Field(..., description="Entry date (YYYY-MM-DD)", examples=["2025-12-12"])
    weather: Optional[str] = None
    temperature: Optional[float] = None
    humidity: Optional[float] = None
    work_done: Optional[str] = None
    notes: Optional[str] = None


# =============================================================================
# PROXY REQUEST BODIES
# =============================================================================
# Required fields are Optional here on purpose: the routes check them and
# answer 400 with a readable message instead of FastAPI's 422.

class DiseaseDiagnosisRequest(BaseModel):
    """JSON body for POST /proxy/disease-diagnosis."""
    image: Optional[str] = Field(
        default=None,
        description="Base64 image payload without the data: prefix"
    )
    mimeType: str = Field(default="image/jpeg", description="Image MIME type")


class ChatMessageRequest(BaseModel):
    """JSON body for POST /proxy/chat-message."""
    message: Optional[str] = Field(default=None, description="User message")
    session_id: Optional[str] = Field(
        default=None,
        description="Conversation thread id; the server assigns one when omitted"
    )


def dump_body(payload) -> dict:
    """
    Turn a dict or a pydantic model into a JSON-ready dict.

    Models drop fields that were never set or are None, so optional keys
    are omitted rather than sent as null.
    """
    if isinstance(payload, BaseModel):
        return payload.model_dump(exclude_none=True)
    return dict(payload)
