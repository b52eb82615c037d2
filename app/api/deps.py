"""
app/api/deps.py

Purpose: Request dependencies shared by the API routers

- Resolves the app's VerificationStore and Settings from app.state
- Enforces the shared client secret
"""

import secrets
from typing import Optional

from fastapi import Request

from app.core.config import Settings
from app.core.exceptions import ClientSecretMismatchError
from app.services.verification_store import VerificationStore
from utils.constants import MSG_CLIENT_SECRET_MISMATCH


def get_store(request: Request) -> VerificationStore:
    return request.app.state.verification_store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def check_client_secret(config: Settings, client_secret: Optional[str]):
    """
    Raises ClientSecretMismatchError unless client_secret equals the configured one.
    Uses a constant-time comparison.
    """
    expected = config.CLIENT_SECRET
    if not expected or client_secret is None:
        raise ClientSecretMismatchError(MSG_CLIENT_SECRET_MISMATCH)
    if not secrets.compare_digest(expected.encode("utf-8"), client_secret.encode("utf-8")):
        raise ClientSecretMismatchError(MSG_CLIENT_SECRET_MISMATCH)
