"""
app/services/twilio_service.py

Purpose: Twilio SMS sending

- Sends SMS messages via the Twilio Messages REST API
- Authenticates with an API Key / API Secret pair scoped to an Account SID
- Implements the MessageSender interface used by the verification store
"""

import httpx
from typing import Dict, Any, Optional

from app.core.config import Settings
from app.core.exceptions import MessageDispatchError
from app.core.logging import get_logger

logger = get_logger(__name__)


class TwilioService:
    """Service for sending SMS messages via Twilio"""

    def __init__(
        self,
        account_sid: str,
        api_key: str,
        api_secret: str,
        from_number: str,
        base_url: str = "https://api.twilio.com/2010-04-01",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.account_sid = account_sid
        self.api_key = api_key
        self.api_secret = api_secret
        self.from_number = from_number
        self.messages_url = f"{base_url.rstrip('/')}/Accounts/{account_sid}/Messages.json"
        self._timeout = timeout
        self._client = client

    @classmethod
    def from_settings(cls, config: Settings) -> "TwilioService":
        return cls(
            account_sid=config.TWILIO_ACCOUNT_SID,
            api_key=config.TWILIO_API_KEY,
            api_secret=config.TWILIO_API_SECRET,
            from_number=config.SENDING_PHONE_NUMBER,
            base_url=config.TWILIO_API_BASE_URL,
            timeout=config.SMS_DISPATCH_TIMEOUT_SECONDS or 10.0,
        )

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def send_message(self, to_phone: str, message: str) -> Dict[str, Any]:
        """
        Sends an SMS via Twilio.

        Args:
            to_phone: Recipient phone (+15551234567)
            message: Message text

        Returns:
            Parsed Twilio message resource

        Raises:
            MessageDispatchError: On timeout, transport failure or non-2xx response
        """
        data = {
            "From": self.from_number,
            "To": to_phone,
            "Body": message
        }

        logger.info(f"📤 Sending Twilio SMS to {to_phone}")

        try:
            response = await self._get_client().post(
                self.messages_url,
                data=data,
                auth=(self.api_key, self.api_secret)
            )
        except httpx.TimeoutException as e:
            raise MessageDispatchError("Twilio API timeout") from e
        except httpx.HTTPError as e:
            raise MessageDispatchError(f"Twilio API request failed: {e}") from e

        if response.status_code not in (200, 201):
            raise MessageDispatchError(
                f"Twilio API error: {response.status_code}",
                details=response.text
            )

        return response.json()

    async def send(self, to_phone: str, body: str) -> Dict[str, Any]:
        """
        MessageSender implementation: never raises, reports the outcome instead.

        Returns:
            {
                "success": True/False,
                "message_sid": "SMxxx...",
                "status": "queued",
                "error": "Optional error message"
            }
        """
        try:
            result = await self.send_message(to_phone, body)
        except MessageDispatchError as e:
            logger.error(f"❌ {e.message}", extra={"phone": to_phone})
            return {
                "success": False,
                "error": e.message
            }

        logger.info(f"✅ SMS sent: SID={result.get('sid')}")
        return {
            "success": True,
            "message_sid": result.get("sid"),
            "status": result.get("status")
        }

    async def close(self):
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
