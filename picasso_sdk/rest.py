"""Client for the Discord REST API.

Two authorization modes exist and are kept apart:

- ``DiscordRestClient`` sends ``Authorization: Bot <token>`` and covers
  command registration, messages, DMs and member roles.
- ``InteractionClient`` (from ``DiscordRestClient.interaction(token)``)
  addresses the original response and followups of one interaction through
  its webhook token and sends no bot credentials.

Every call is a single request: no retry, no caching, no rate-limit
bookkeeping. A non-2xx answer raises ``DiscordAPIError``.
"""
from typing import Any, Dict, List, Optional, Union

import httpx

from .config import Config, Credentials
from .errors import ConfigurationError, DiscordAPIError
from .observability import get_logger
from .types import (
    ApplicationCommand,
    Channel,
    CreateApplicationCommand,
    GuildApplicationCommandPermissions,
    GuildMember,
    InteractionResponseData,
    Message,
    MessageCreate,
)

logger = get_logger('picasso-sdk.rest')

DEFAULT_TIMEOUT = 10.0
_NO_BODY = object()


def _error_from_response(response: httpx.Response) -> DiscordAPIError:
    try:
        body = response.json()
    except ValueError:
        body = response.text
    return DiscordAPIError(response.status_code, response.reason_phrase, body)


class DiscordRestClient:
    """Bot-authorized Discord REST client.

    Args:
        application_id: Discord application ID
        bot_token: Bot token, required for bot-authorized calls only
        http_client: httpx.AsyncClient to issue requests with; one is created
            (and closed by ``aclose``) when omitted
        base_url: Versioned API base URL
    """

    def __init__(
        self,
        application_id: str,
        bot_token: Optional[str] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        base_url: str = Config.DISCORD_API_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.application_id = application_id
        self._bot_token = bot_token
        self.base_url = base_url.rstrip('/')
        self._owns_http = http_client is None
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_credentials(cls, credentials: Credentials, **kwargs) -> "DiscordRestClient":
        return cls(credentials.application_id, credentials.bot_token, **kwargs)

    async def aclose(self):
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    def interaction(self, token: str) -> "InteractionClient":
        """Client for the responses of one interaction."""
        return InteractionClient(self, token)

    def _bot_headers(self) -> Dict[str, str]:
        if not self._bot_token:
            raise ConfigurationError("A bot token is required for this call; pass bot_token first")
        return {'Authorization': f'Bot {self._bot_token}'}

    async def _send(
        self,
        method: str,
        path: str,
        headers: Dict[str, str],
        body: Any = _NO_BODY,
    ) -> Any:
        url = f"{self.base_url}/{path}"
        kwargs = {}
        if body is not _NO_BODY:
            kwargs['json'] = body

        response = await self._http.request(method, url, headers=headers, **kwargs)

        if not response.is_success:
            error = _error_from_response(response)
            logger.warning(
                f"Discord {method} {path.split('/')[0]} returned {response.status_code}",
                status_code=response.status_code,
                discord_code=error.code,
                response_text=response.text[:200]
            )
            raise error

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def _bot_request(self, method: str, path: str, body: Any = _NO_BODY) -> Any:
        return await self._send(method, path, self._bot_headers(), body)

    # --- Global commands ---

    def _commands_path(self, guild_id: Optional[str] = None) -> str:
        if guild_id is None:
            return f"applications/{self.application_id}/commands"
        return f"applications/{self.application_id}/guilds/{guild_id}/commands"

    async def get_global_commands(self) -> List[ApplicationCommand]:
        return await self._bot_request('GET', self._commands_path())

    async def create_global_command(self, command: CreateApplicationCommand) -> ApplicationCommand:
        return await self._bot_request('POST', self._commands_path(), command)

    async def get_global_command(self, command_id: str) -> ApplicationCommand:
        return await self._bot_request('GET', f"{self._commands_path()}/{command_id}")

    async def edit_global_command(self, command_id: str, command: CreateApplicationCommand) -> ApplicationCommand:
        return await self._bot_request('PATCH', f"{self._commands_path()}/{command_id}", command)

    async def delete_global_command(self, command_id: str) -> None:
        await self._bot_request('DELETE', f"{self._commands_path()}/{command_id}")

    async def bulk_overwrite_global_commands(
        self, commands: List[CreateApplicationCommand]
    ) -> List[ApplicationCommand]:
        """Replace every global command; returns them with their assigned ids."""
        return await self._bot_request('PUT', self._commands_path(), list(commands))

    # --- Guild commands ---

    async def get_guild_commands(self, guild_id: str) -> List[ApplicationCommand]:
        return await self._bot_request('GET', self._commands_path(guild_id))

    async def create_guild_command(self, guild_id: str, command: CreateApplicationCommand) -> ApplicationCommand:
        return await self._bot_request('POST', self._commands_path(guild_id), command)

    async def get_guild_command(self, guild_id: str, command_id: str) -> ApplicationCommand:
        return await self._bot_request('GET', f"{self._commands_path(guild_id)}/{command_id}")

    async def edit_guild_command(
        self, guild_id: str, command_id: str, command: CreateApplicationCommand
    ) -> ApplicationCommand:
        return await self._bot_request('PATCH', f"{self._commands_path(guild_id)}/{command_id}", command)

    async def delete_guild_command(self, guild_id: str, command_id: str) -> None:
        await self._bot_request('DELETE', f"{self._commands_path(guild_id)}/{command_id}")

    async def bulk_overwrite_guild_commands(
        self, guild_id: str, commands: List[CreateApplicationCommand]
    ) -> List[ApplicationCommand]:
        """Replace the whole command set of a guild.

        Returns:
            The registered commands, with server-assigned ids
        """
        return await self._bot_request('PUT', self._commands_path(guild_id), list(commands))

    async def get_guild_command_permissions(self, guild_id: str) -> List[GuildApplicationCommandPermissions]:
        return await self._bot_request('GET', f"{self._commands_path(guild_id)}/permissions")

    # --- Messages and channels ---

    async def send_message(self, channel_id: str, message: Union[str, MessageCreate]) -> Message:
        """Post a message to a channel; a string is sent as its content."""
        payload = {'content': message} if isinstance(message, str) else message
        return await self._bot_request('POST', f"channels/{channel_id}/messages", payload)

    async def create_dm(self, user_id: str) -> Channel:
        """Open (or fetch the existing) DM channel with a user."""
        return await self._bot_request('POST', f"users/{user_id}/channels")

    # --- Guild members ---

    async def give_role(self, user_id: str, guild_id: str, role_id: str) -> None:
        """Add a role to a guild member. Needs the MANAGE_ROLES permission."""
        await self._bot_request('PUT', f"guilds/{guild_id}/members/{user_id}/roles/{role_id}")

    async def remove_role(self, user_id: str, guild_id: str, role_id: str) -> None:
        await self._bot_request('DELETE', f"guilds/{guild_id}/members/{user_id}/roles/{role_id}")

    async def get_guild_member(self, guild_id: str, user_id: str) -> GuildMember:
        return await self._bot_request('GET', f"guilds/{guild_id}/members/{user_id}")


class InteractionClient:
    """Webhook-token client for one interaction's responses.

    Discord only accepts these calls while the interaction token is valid
    (15 minutes); an expired token surfaces as a DiscordAPIError.
    """

    def __init__(self, rest: DiscordRestClient, token: str):
        self._rest = rest
        self.token = token

    @property
    def _webhook_path(self) -> str:
        return f"webhooks/{self._rest.application_id}/{self.token}"

    async def _request(self, method: str, path: str, body: Any = _NO_BODY) -> Any:
        return await self._rest._send(method, path, {}, body)

    async def get_original_response(self) -> Message:
        return await self._request('GET', f"{self._webhook_path}/messages/@original")

    async def edit_original_response(self, message: InteractionResponseData) -> Message:
        return await self._request('PATCH', f"{self._webhook_path}/messages/@original", message)

    async def delete_original_response(self) -> None:
        await self._request('DELETE', f"{self._webhook_path}/messages/@original")

    async def create_followup(self, message: Union[str, InteractionResponseData]) -> Message:
        payload = {'content': message} if isinstance(message, str) else message
        return await self._request('POST', self._webhook_path, payload)

    async def get_followup(self, message_id: str) -> Message:
        return await self._request('GET', f"{self._webhook_path}/messages/{message_id}")

    async def edit_followup(self, message_id: str, message: InteractionResponseData) -> Message:
        return await self._request('PATCH', f"{self._webhook_path}/messages/{message_id}", message)

    async def delete_followup(self, message_id: str) -> None:
        await self._request('DELETE', f"{self._webhook_path}/messages/{message_id}")
