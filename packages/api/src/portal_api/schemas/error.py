# This project was developed with assistance from AI tools.
"""Error response body shared by every failing request."""

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """``{"error": "..."}`` plus optional context (e.g. role denials on 403)."""

    model_config = ConfigDict(extra="allow")

    error: str = Field(description="Human-readable explanation of the failure.")
