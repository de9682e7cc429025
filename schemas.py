"""
Request bodies for the authenticator API, validated once at the boundary.
"""
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field


class RequestBody(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True, str_strip_whitespace=True)

    # returned as the 400 error when validation fails
    error_message: ClassVar[str] = "Invalid request"


class SetupRequest(RequestBody):
    error_message: ClassVar[str] = "Email is required"

    email: str = Field(..., min_length=1, description="Account email, used as the store key")
    name: Optional[str] = Field(None, description="Account label shown in the authenticator app")


class VerifyRequest(RequestBody):
    error_message: ClassVar[str] = "Token and secret are required"

    secret: str = Field(..., min_length=1, description="Base32 shared secret")
    token: str = Field(..., min_length=1, description="Code typed by the user")
    email: Optional[str] = Field(None, description="Account to mark as verified on success")


class SecretRequest(RequestBody):
    error_message: ClassVar[str] = "Secret is required"

    secret: str = Field(..., min_length=1, description="Base32 shared secret")


class ParseUriRequest(RequestBody):
    error_message: ClassVar[str] = "Text is required"

    text: str = Field(..., min_length=1, description="Text decoded from a scanned QR code")
