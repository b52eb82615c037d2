"""
app/api/verification.py

Purpose: Phone verification endpoints

- POST /api/request: sends a one-time code to a phone number
- POST /api/verify: checks an SMS payload against the pending code
- POST /api/reset: forgets the pending code for a phone number

Missing fields and a wrong client_secret are rejected before the
verification store is touched. A failed verification is a normal
success=false payload, not an HTTP error.
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_store, get_settings, check_client_secret
from app.core.config import Settings
from app.core.exceptions import MissingFieldsError
from app.schemas.response import RequestCodeResponse, VerificationResult
from app.schemas.verification import PhoneRequest, VerifyRequest
from app.services.verification_store import VerificationStore
from utils.constants import (
    MSG_REQUEST_FIELDS_REQUIRED,
    MSG_VERIFY_FIELDS_REQUIRED,
    MSG_RESET_FIELDS_REQUIRED,
    MSG_VERIFY_FAILED,
    MSG_RESET_FAILED,
)
from utils.time_utils import to_epoch_millis

router = APIRouter()


@router.post("/request", response_model=RequestCodeResponse)
async def request_code(
    body: PhoneRequest,
    store: VerificationStore = Depends(get_store),
    config: Settings = Depends(get_settings),
):
    """
    Sends a one-time code to the user's phone number for verification.
    Returns the code expiry (epoch ms) so the app can show a countdown.
    """
    if body.client_secret is None or body.phone is None:
        raise MissingFieldsError(MSG_REQUEST_FIELDS_REQUIRED)

    check_client_secret(config, body.client_secret)

    expires_at = await store.request(body.phone)
    return RequestCodeResponse(success=True, time=to_epoch_millis(expires_at))


@router.post("/verify", response_model=VerificationResult, response_model_exclude_none=True)
async def verify_code(
    body: VerifyRequest,
    store: VerificationStore = Depends(get_store),
    config: Settings = Depends(get_settings),
):
    """
    Verifies the one-time code for a phone number.
    sms_message may be the bare code or the whole received SMS.
    """
    if body.client_secret is None or body.phone is None or body.sms_message is None:
        raise MissingFieldsError(MSG_VERIFY_FIELDS_REQUIRED)

    check_client_secret(config, body.client_secret)

    if store.verify(body.phone, body.sms_message):
        return VerificationResult(success=True, phone=body.phone)

    return VerificationResult(success=False, msg=MSG_VERIFY_FAILED)


@router.post("/reset", response_model=VerificationResult, response_model_exclude_none=True)
async def reset_code(
    body: PhoneRequest,
    store: VerificationStore = Depends(get_store),
    config: Settings = Depends(get_settings),
):
    """
    Resets the one-time code for a phone number.
    """
    if body.client_secret is None or body.phone is None:
        raise MissingFieldsError(MSG_RESET_FIELDS_REQUIRED)

    check_client_secret(config, body.client_secret)

    if store.reset(body.phone):
        return VerificationResult(success=True, phone=body.phone)

    return VerificationResult(success=False, msg=MSG_RESET_FAILED)
