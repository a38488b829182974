"""Cloud Functions entry points for the Picasso Discord bot.
Uses Functions Framework for Cloud Functions Gen2
"""
import json
from functools import lru_cache

from asgiref.sync import async_to_sync
from functions_framework import http

from picasso_sdk import (
    CommandRegistry,
    Config,
    ConfigurationError,
    Credentials,
    DiscordRestClient,
    InteractionDispatcher,
    InteractionWebhook,
    sync_commands,
)
from picasso_sdk.observability import init_observability, traced_function
from picasso_sdk.responses import create_info_embed, create_success_embed

logger, _ = init_observability('picasso-bot', app=None)

registry = CommandRegistry()


@registry.command('hello', 'Picasso service greeting')
def handle_hello(interaction):
    """Handle hello command."""
    return create_info_embed(
        title='Welcome to Picasso Service',
        description='Hello! I am your brush to create art. How can I help you today?',
        footer={'text': 'Picasso - Art Bot'}
    )


@registry.command('ping', 'Test bot latency')
def handle_ping(interaction):
    """Handle ping command."""
    return create_success_embed(
        title='Pong!',
        description='Bot is running with Functions Framework.',
        footer={'text': 'Status: Online'}
    )


@registry.command('help', 'Show available commands')
def handle_help(interaction):
    """Handle help command."""
    return create_info_embed(
        title='Available Commands',
        description='Here are the commands you can use:',
        fields=[
            {'name': f'/{command.name}', 'value': command.description, 'inline': True}
            for command in registry.commands
        ],
        footer={'text': 'Picasso - Art Bot'}
    )


@lru_cache(maxsize=None)
def get_credentials() -> Credentials:
    """Credentials from the environment, read on first use."""
    return Credentials.from_env()


@lru_cache(maxsize=None)
def get_webhook() -> InteractionWebhook:
    return InteractionWebhook(get_credentials(), InteractionDispatcher(registry), logger=logger)


def _configuration_error(e):
    logger.error("Discord credentials are not configured", error=e)
    return json.dumps({'error': str(e)}), 500


@http
@traced_function("discord_interactions")
def discord_interactions(request):
    """Serverless function to handle Discord interactions."""
    if request.method != 'POST':
        return json.dumps({'error': 'Method not allowed'}), 405

    try:
        webhook = get_webhook()
    except ConfigurationError as e:
        return _configuration_error(e)

    return async_to_sync(webhook.handle)(request)


async def _register(credentials, guild_id):
    async with DiscordRestClient.from_credentials(credentials) as rest:
        return await sync_commands(rest, registry, guild_id=guild_id)


@http
@traced_function("register_commands")
def register_commands(request):
    """Serverless function to register Discord commands."""
    if request.method != 'POST':
        return json.dumps({'error': 'Method not allowed'}), 405

    if not Config.AUTO_REGISTER_COMMANDS:
        return json.dumps({'message': 'Command registration is disabled'}), 200

    try:
        credentials = get_credentials()
    except ConfigurationError as e:
        return _configuration_error(e)

    if not credentials.bot_token:
        return json.dumps({
            'error': 'DISCORD_BOT_TOKEN and DISCORD_APPLICATION_ID must be configured'
        }), 500

    registered = async_to_sync(_register)(credentials, Config.DISCORD_GUILD_ID)


    return json.dumps({
        'message': 'Registration completed',
        'results': [{'command': command.get('name'), 'id': command.get('id')} for command in registered],
        'note': 'Global commands may take a few minutes to appear in Discord'
    }), 200
