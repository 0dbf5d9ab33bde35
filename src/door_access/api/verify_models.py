"""Pydantic models for the verification endpoint."""

from pydantic import BaseModel, ConfigDict, Field


class VerifyQrRequest(BaseModel):
    """Body posted by the scanner."""

    model_config = ConfigDict(populate_by_name=True, strict=True)

    qr_secret: str = Field(alias="qrSecret", min_length=1)


class VerifyQrResponse(BaseModel):
    """Body returned to the scanner."""

    status: str
    message: str
