"""Interaction processing logic."""
import inspect
import json
from typing import Any, Awaitable, Callable, Optional, Union

from .errors import (
    InteractionDecodeError,
    MissingAutocompleteHandlerError,
    UnknownInteractionTypeError,
)
from .observability import get_logger, traced_function
from .registry import CommandRegistry, HandlerResult
from .types import Interaction, InteractionResponse, InteractionResponseType, InteractionType

logger = get_logger('picasso-sdk.dispatcher')

Middleware = Callable[[Interaction], Union[Any, Awaitable[Any]]]


async def _maybe_await(value):
    if inspect.isawaitable(value):
        return await value
    return value


class InteractionDispatcher:
    """Routes decoded interactions to registered handlers.

    Args:
        registry: Command and component handlers
        middleware: Optional hook run before routing. Returning an
            InteractionResponse short-circuits the handler; any other non-None
            value is passed to the handler as a second argument.
    """

    def __init__(self, registry: CommandRegistry, middleware: Optional[Middleware] = None):
        self.registry = registry
        self.middleware = middleware

    @staticmethod
    def decode(body: Union[bytes, str]) -> Interaction:
        """Parse a raw request body into an Interaction."""
        try:
            payload = json.loads(body)
        except (ValueError, TypeError) as e:
            raise InteractionDecodeError(f"Request body is not valid JSON: {e}") from e
        return Interaction.from_dict(payload)

    @traced_function("dispatch_interaction")
    async def dispatch(self, interaction: Interaction) -> HandlerResult:
        """Produce the response for one interaction."""
        if interaction.type == InteractionType.PING:
            return InteractionResponse(InteractionResponseType.PONG)

        context = None
        if self.middleware is not None:
            context = await _maybe_await(self.middleware(interaction))
            if isinstance(context, InteractionResponse):
                logger.debug(
                    "Middleware answered interaction",
                    interaction_id=interaction.id,
                    interaction_type=int(interaction.type)
                )
                return context

        handler = self._resolve(interaction)
        if context is None:
            result = handler(interaction)
        else:
            result = handler(interaction, context)
        return await _maybe_await(result)

    def _resolve(self, interaction: Interaction):
        """Find the handler for a non-PING interaction."""
        if interaction.type == InteractionType.APPLICATION_COMMAND:
            return self.registry.get_command(interaction.data.name).exec

        if interaction.type == InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE:
            command = self.registry.get_command(interaction.data.name)
            if command.autocomplete is None:
                raise MissingAutocompleteHandlerError(command.name)
            return command.autocomplete

        if interaction.type in (InteractionType.MESSAGE_COMPONENT, InteractionType.MODAL_SUBMIT):
            return self.registry.get_component(interaction.data.custom_id).exec

        raise UnknownInteractionTypeError(interaction.type)
