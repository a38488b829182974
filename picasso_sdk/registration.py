"""Register the commands of a CommandRegistry with Discord."""
from typing import List, Optional

from .observability import get_logger, traced_function
from .registry import CommandRegistry
from .rest import DiscordRestClient
from .types import ApplicationCommand

logger = get_logger('picasso-sdk.registration')


@traced_function("sync_commands")
async def sync_commands(
    rest: DiscordRestClient,
    registry: CommandRegistry,
    guild_id: Optional[str] = None,
) -> List[ApplicationCommand]:
    """Overwrite the registered commands with the registry's definitions.

    Guild commands update instantly; global commands may take a while to
    propagate across Discord.

    Args:
        rest: Bot-authorized REST client
        registry: Registry holding the command definitions
        guild_id: Guild to register in; global registration when None

    Returns:
        The registered commands, with server-assigned ids
    """
    definitions = registry.command_definitions()
    scope = f"guild {guild_id}" if guild_id else "global"

    if guild_id:
        registered = await rest.bulk_overwrite_guild_commands(guild_id, definitions)
    else:
        registered = await rest.bulk_overwrite_global_commands(definitions)

    logger.info(
        f"Registered {len(registered)} {scope} commands",
        commands=[command.get('name') for command in registered]
    )
    return registered
