"""
Exceptions raised across the voice command package.

Domain outcomes (no command, no match, page not found) are never raised;
they come back as ActionResult values. Only configuration and
infrastructure problems are exceptions.
"""


class VoiceCommandError(Exception):
    """Base class for all voice command errors."""


class IntentConfigurationError(VoiceCommandError):
    """An intent definition could not be built (bad key or pattern)."""


class ContentLookupUnavailable(VoiceCommandError):
    """The content store could not be reached or answered with garbage."""


class ContentDeliveryError(VoiceCommandError):
    """Base for errors surfaced by the content delivery facade."""

    status_code = 500
    code = "delivery_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ContentNotFound(ContentDeliveryError):
    status_code = 404
    code = "not_found"


class CommerceUnavailable(ContentDeliveryError):
    status_code = 400
    code = "commerce_unavailable"

    def __init__(self, message: str = "Product catalogue is not available.") -> None:
        super().__init__(message)


class DeliveryDisabled(ContentDeliveryError):
    status_code = 403
    code = "delivery_disabled"

    def __init__(self, message: str = "Smart speaker integration is disabled.") -> None:
        super().__init__(message)
