from typing import Optional, Any

class SMSVerifyError(Exception):
    """
    Base exception for the SMS verification service.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

class ConfigurationError(SMSVerifyError):
    """
    Raised at startup when required configuration is missing.
    details holds one operator-facing remediation message per problem.
    """
    def __init__(self, message: str = "Configuration error", details: Optional[Any] = None):
        super().__init__(message, code="CONFIGURATION_ERROR", status_code=500, details=details)

class MissingFieldsError(SMSVerifyError):
    """
    Raised when a required request field is absent.
    """
    def __init__(self, message: str = "Required fields are missing", details: Optional[Any] = None):
        super().__init__(message, code="MISSING_FIELDS", status_code=400, details=details)

class ClientSecretMismatchError(SMSVerifyError):
    """
    Raised when the caller's client_secret does not match the configured one.
    """
    def __init__(self, message: str = "The client_secret parameter does not match.", details: Optional[Any] = None):
        super().__init__(message, code="INVALID_CLIENT_SECRET", status_code=403, details=details)

class MessageDispatchError(SMSVerifyError):
    """
    Raised when the messaging provider rejects or fails to accept an SMS.
    """
    def __init__(self, message: str = "External service error", details: Optional[Any] = None):
        super().__init__(message, code="EXTERNAL_SERVICE_ERROR", status_code=502, details=details)
