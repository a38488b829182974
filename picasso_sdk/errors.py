"""Exceptions raised by the SDK."""
from typing import Any, Optional


class PicassoError(Exception):
    """Base class for all SDK errors."""


class ConfigurationError(PicassoError, ValueError):
    """Required configuration is missing."""


class InteractionDecodeError(PicassoError):
    """The request body is not a well-formed interaction."""


class InvalidResponseError(PicassoError, ValueError):
    """An interaction response that Discord would reject."""


class RoutingError(PicassoError):
    """No handler can be resolved for an interaction."""


class UnknownCommandError(RoutingError, LookupError):
    def __init__(self, name: str):
        super().__init__(f"No command registered under {name!r}")
        self.name = name


class UnknownComponentError(RoutingError, LookupError):
    def __init__(self, custom_id: str):
        super().__init__(f"No component registered under {custom_id!r}")
        self.custom_id = custom_id


class MissingAutocompleteHandlerError(RoutingError):
    def __init__(self, name: str):
        super().__init__(f"Command {name!r} has no autocomplete handler")
        self.name = name


class UnknownInteractionTypeError(RoutingError):
    def __init__(self, interaction_type: Any):
        super().__init__(f"Unrecognized interaction type: {interaction_type!r}")
        self.interaction_type = interaction_type


class DiscordAPIError(PicassoError):
    """Discord answered a REST call with a non-2xx status."""

    def __init__(self, status: int, status_text: str, body: Any = None):
        self.status = status
        self.status_text = status_text
        self.body = body
        self.code: Optional[int] = None
        self.message = status_text

        if isinstance(body, dict):
            self.code = body.get('code')
            self.message = body.get('message') or status_text
        elif isinstance(body, str) and body:
            self.message = body[:200]

        super().__init__(f"{status} {status_text}: {self.message}")
