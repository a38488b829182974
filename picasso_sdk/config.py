"""Application configuration."""
import os
from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError


class Config:
    """Application configuration."""
    # Discord configuration
    DISCORD_PUBLIC_KEY = os.environ.get('DISCORD_PUBLIC_KEY')
    DISCORD_BOT_TOKEN = os.environ.get('DISCORD_BOT_TOKEN')
    DISCORD_APPLICATION_ID = os.environ.get('DISCORD_APPLICATION_ID')
    DISCORD_GUILD_ID = os.environ.get('DISCORD_GUILD_ID')
    AUTO_REGISTER_COMMANDS = os.environ.get('AUTO_REGISTER_COMMANDS', 'true').lower() == 'true'
    DISCORD_API_BASE_URL = os.environ.get('DISCORD_API_BASE_URL', "https://discord.com/api/v10").rstrip('/')

    # Runtime configuration
    ENVIRONMENT = os.environ.get('ENVIRONMENT', 'production')
    LOCAL_DEV = bool(os.environ.get('LOCAL_DEV'))


@dataclass(frozen=True)
class Credentials:
    """Application credentials, fixed for the lifetime of a client."""

    application_id: str
    public_key: str
    bot_token: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Credentials":
        """Build credentials from the environment-backed Config."""
        missing = [
            name for name, value in (
                ('DISCORD_APPLICATION_ID', Config.DISCORD_APPLICATION_ID),
                ('DISCORD_PUBLIC_KEY', Config.DISCORD_PUBLIC_KEY),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(f"{', '.join(missing)} must be configured")

        return cls(
            application_id=Config.DISCORD_APPLICATION_ID,
            public_key=Config.DISCORD_PUBLIC_KEY,
            bot_token=Config.DISCORD_BOT_TOKEN or None,
        )

    def status(self) -> dict:
        """Report which credentials are set, without exposing them."""
        return {
            'public_key_set': bool(self.public_key),
            'bot_token_set': bool(self.bot_token),
            'app_id_set': bool(self.application_id),
        }
