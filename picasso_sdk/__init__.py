"""Webhook responder and REST client for Discord interaction bots."""
from .config import Config, Credentials
from .dispatcher import InteractionDispatcher
from .errors import (
    ConfigurationError,
    DiscordAPIError,
    InteractionDecodeError,
    InvalidResponseError,
    MissingAutocompleteHandlerError,
    PicassoError,
    RoutingError,
    UnknownCommandError,
    UnknownComponentError,
    UnknownInteractionTypeError,
)
from .registration import sync_commands
from .registry import Command, CommandRegistry, Component
from .rest import DiscordRestClient, InteractionClient
from .types import (
    Interaction,
    InteractionResponse,
    InteractionResponseType,
    InteractionType,
    MessageFlags,
)
from .verification import verify_signature
from .webhook import InteractionWebhook, create_app, register_routes

__all__ = [
    'Command',
    'CommandRegistry',
    'Component',
    'Config',
    'ConfigurationError',
    'Credentials',
    'DiscordAPIError',
    'DiscordRestClient',
    'Interaction',
    'InteractionClient',
    'InteractionDecodeError',
    'InteractionDispatcher',
    'InteractionResponse',
    'InteractionResponseType',
    'InteractionType',
    'InteractionWebhook',
    'InvalidResponseError',
    'MessageFlags',
    'MissingAutocompleteHandlerError',
    'PicassoError',
    'RoutingError',
    'UnknownCommandError',
    'UnknownComponentError',
    'UnknownInteractionTypeError',
    'create_app',
    'register_routes',
    'sync_commands',
    'verify_signature',
]
