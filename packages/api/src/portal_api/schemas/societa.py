# This project was developed with assistance from AI tools.
"""Company (società) response schemas.

A company is always rendered either in full (``SocietaResponse``) or in the
censored public shape (``CensoredSocieta``). The censored model has no
``nome``/``fatturato``/``ebitda`` fields at all, so they cannot leak.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from . import Envelope


class SocietaResponse(BaseModel):
    """Full company record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    nome: str
    fatturato: float
    ebitda: float
    regione: str
    codice_ateco: str
    settore: str
    descrizione: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CensoredSocieta(BaseModel):
    """Public company view: sensitive financials removed."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    regione: str
    codice_ateco: str
    settore: str
    descrizione: str
    censored: bool = Field(default=True, alias="_censored")
    censored_reason: str = Field(alias="_message")


RenderedSocieta = SocietaResponse | CensoredSocieta


class SocietaDetailResponse(Envelope):
    data: RenderedSocieta


class SocietaListResponse(Envelope):
    data: list[RenderedSocieta]


class SocietaMutationResponse(Envelope):
    success: bool = True
    data: SocietaResponse


class SocietaDeleteResponse(Envelope):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    deleted_id: int = Field(alias="deletedId")
