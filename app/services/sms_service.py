"""
app/services/sms_service.py

Purpose: SMS messaging capability

- Defines the MessageSender interface the verification store depends on
- Builds the verification SMS body (code + Android app hash)
"""

from typing import Any, Dict, Protocol

from utils.constants import VERIFICATION_SMS_TEMPLATE


class MessageSender(Protocol):
    """
    Anything that can deliver a text message to a phone number.

    send() returns an outcome dict shaped like:
        {"success": True/False, "message_sid": "SMxxx", "error": "..."}
    """

    async def send(self, to_phone: str, body: str) -> Dict[str, Any]:
        ...


def format_verification_sms(code: str, app_hash: str) -> str:
    """
    Builds the SMS body for a one-time code.

    The app hash goes on its own last line so Android's SMS Retriever API
    can hand the message to the right app without SMS permissions.
    """
    return VERIFICATION_SMS_TEMPLATE.format(code=code, app_hash=app_hash or "").rstrip("\n")
