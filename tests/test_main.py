"""Tests for the Functions Framework entry points."""
import importlib
import json

import pytest

from picasso_sdk.config import Config


@pytest.fixture
def main(monkeypatch):
    monkeypatch.setattr(Config, 'LOCAL_DEV', True)
    monkeypatch.setattr(Config, 'DISCORD_APPLICATION_ID', '')
    monkeypatch.setattr(Config, 'DISCORD_PUBLIC_KEY', '')
    monkeypatch.setattr(Config, 'DISCORD_BOT_TOKEN', '')
    module = importlib.import_module('main')
    module.get_credentials.cache_clear()
    module.get_webhook.cache_clear()
    yield module
    module.get_credentials.cache_clear()
    module.get_webhook.cache_clear()


def test_import_does_not_require_credentials(main):
    assert [command.name for command in main.registry.commands] == ['hello', 'ping', 'help']


def test_missing_credentials_reported_on_request(main, signed_request):
    body, status = main.discord_interactions(signed_request({'type': 1}))
    assert status == 500
    assert 'DISCORD_PUBLIC_KEY' in json.loads(body)['error']


def test_register_commands_reports_missing_credentials(main, monkeypatch, signed_request):
    monkeypatch.setattr(Config, 'AUTO_REGISTER_COMMANDS', True)
    body, status = main.register_commands(signed_request({}))
    assert status == 500
    assert 'DISCORD_APPLICATION_ID' in json.loads(body)['error']


def test_credentials_read_once_configured(main, monkeypatch, public_key, signed_request):
    main.discord_interactions(signed_request({'type': 1}))

    monkeypatch.setattr(Config, 'DISCORD_APPLICATION_ID', '111')
    monkeypatch.setattr(Config, 'DISCORD_PUBLIC_KEY', public_key)
    response = main.discord_interactions(signed_request({'type': 1}))

    assert response.status_code == 200
    assert json.loads(response.get_data()) == {'type': 1}
