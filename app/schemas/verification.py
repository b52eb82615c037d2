"""
app/schemas/verification.py

Purpose: Request bodies for the verification API

Fields are optional at the schema level so that a missing field gets the
service's own error message instead of a generic validation error.
"""

from pydantic import BaseModel, Field
from typing import Optional


class PhoneRequest(BaseModel):
    """Body of POST /api/request and POST /api/reset."""
    client_secret: Optional[str] = Field(None, description="Secret shared between app and server")
    phone: Optional[str] = Field(None, description="Phone number in E.164 format")

    class Config:
        json_schema_extra = {
            "example": {
                "client_secret": "shared-secret",
                "phone": "+15551234567"
            }
        }


class VerifyRequest(PhoneRequest):
    """Body of POST /api/verify."""
    sms_message: Optional[str] = Field(None, description="Received SMS body or the bare code")

    class Config:
        json_schema_extra = {
            "example": {
                "client_secret": "shared-secret",
                "phone": "+15551234567",
                "sms_message": "[#] Use 482193 as your code for the app!\nFA+9qCX9VSu"
            }
        }
