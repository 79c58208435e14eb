"""
Custom Exception Classes for Submission Rate Limiting
"""

from typing import Dict, Any, Optional
from enum import Enum


class RateLimitError(Exception):
    """
    Base exception class for rate limit errors.

    Carries structured details so callers can log or serialize the failure.
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.error_code = error_code or RateLimitErrorCodes.RATE_LIMIT_ERROR.value

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details
        }


class NotificationDeliveryError(RateLimitError):
    """
    Raised when a notification email could not be handed to the mail transport.

    Never escapes the notifier: the state transition that triggered the
    notification stands regardless.
    """

    def __init__(
        self,
        recipient: str,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.recipient = recipient
        if message is None:
            message = f"Could not deliver rate limit notification to {recipient}"

        delivery_details = {"recipient": recipient}
        if details:
            delivery_details.update(details)

        super().__init__(message, delivery_details, RateLimitErrorCodes.DELIVERY_ERROR.value)


class RateLimitConfigurationError(RateLimitError):
    """Raised when a FORMGUARD setting holds a value of the wrong shape"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.config_key = config_key

        config_details = {}
        if config_key:
            config_details["config_key"] = config_key
        if details:
            config_details.update(details)

        super().__init__(message, config_details, RateLimitErrorCodes.CONFIGURATION_ERROR.value)


class RateLimitErrorCodes(Enum):
    """Enumeration of rate limit error codes"""

    RATE_LIMIT_ERROR = "RATE_LIMIT_ERROR"
    DELIVERY_ERROR = "DELIVERY_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
