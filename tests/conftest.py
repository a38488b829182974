"""Shared fixtures: a real Ed25519 key pair and signed request builders."""
import json

import pytest
from nacl.signing import SigningKey
from werkzeug.test import EnvironBuilder

from picasso_sdk import CommandRegistry, Credentials, InteractionDispatcher, InteractionWebhook

from .payloads import TIMESTAMP


@pytest.fixture
def signing_key():
    return SigningKey.generate()


@pytest.fixture
def public_key(signing_key):
    return signing_key.verify_key.encode().hex()


@pytest.fixture
def credentials(public_key):
    return Credentials(application_id='111', public_key=public_key, bot_token='bot-token')


@pytest.fixture
def registry():
    return CommandRegistry()


@pytest.fixture
def webhook(credentials, registry):
    return InteractionWebhook(credentials, InteractionDispatcher(registry))


@pytest.fixture
def sign(signing_key):
    """Return the hex signature of timestamp + body."""
    def _sign(body: bytes, timestamp: str = TIMESTAMP) -> str:
        return signing_key.sign(timestamp.encode() + body).signature.hex()
    return _sign


@pytest.fixture
def signed_request(sign):
    """Build a werkzeug Request carrying a valid signature for its body."""
    def _build(payload, headers=None):
        body = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
        request_headers = {
            'X-Signature-Ed25519': sign(body),
            'X-Signature-Timestamp': TIMESTAMP,
        }
        if headers is not None:
            request_headers = headers
        builder = EnvironBuilder(
            method='POST',
            path='/discord/interactions',
            data=body,
            headers=request_headers,
            content_type='application/json',
        )
        return builder.get_request()
    return _build
