"""Tests for registering registry commands with Discord."""
import json

import httpx
import pytest

from picasso_sdk.registration import sync_commands
from picasso_sdk.rest import DiscordRestClient


def _rest(seen):
    def handler(request):
        seen.append(request)
        commands = json.loads(request.content)
        return httpx.Response(200, json=[dict(c, id=str(900 + i)) for i, c in enumerate(commands)])

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return DiscordRestClient('111', 'bot-token', http_client=http, base_url='https://discord.com/api/v10')


@pytest.fixture
def populated(registry):
    registry.command('hello', 'Greeting')(lambda i: None)
    registry.command('ping', 'Test bot latency')(lambda i: None)
    return registry


class TestSyncCommands:
    @pytest.mark.asyncio
    async def test_guild_scope(self, populated):
        seen = []
        registered = await sync_commands(_rest(seen), populated, guild_id='555')

        assert seen[0].method == 'PUT'
        assert seen[0].url.path == '/api/v10/applications/111/guilds/555/commands'
        assert [c['name'] for c in json.loads(seen[0].content)] == ['hello', 'ping']
        assert [c['id'] for c in registered] == ['900', '901']

    @pytest.mark.asyncio
    async def test_global_scope(self, populated):
        seen = []
        await sync_commands(_rest(seen), populated)
        assert seen[0].url.path == '/api/v10/applications/111/commands'
