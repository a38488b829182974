"""Inbound webhook endpoint for Discord interactions.

Request lifecycle: headers checked (403), signature verified (401), body
decoded and routed by the dispatcher (200), any other fault answered with a
generic 500 whose detail only goes to the logs.
"""
import json
from datetime import datetime, timezone

from flask import Flask, Response, g, has_app_context, jsonify, request

from .config import Credentials
from .dispatcher import InteractionDispatcher
from .errors import InvalidResponseError
from .flask_middleware import add_correlation_middleware
from .observability import get_correlation_id, get_logger, init_observability, traced_function
from .types import InteractionResponse
from .verification import verify_signature

SIGNATURE_HEADER = 'X-Signature-Ed25519'
TIMESTAMP_HEADER = 'X-Signature-Timestamp'


def _text_response(text: str, status: int) -> Response:
    return Response(text, status=status, mimetype='text/plain')


def _correlation_id(req) -> str:
    if has_app_context() and 'correlation_id' in g:
        return g.correlation_id
    return get_correlation_id(req)


def _response_body(result) -> dict:
    """JSON body for a handler result; dicts are validated, then sent as-is."""
    if isinstance(result, InteractionResponse):
        return result.to_dict()
    if not isinstance(result, dict) or 'type' not in result:
        raise InvalidResponseError(f"Handler returned {type(result).__name__}, not a response")
    InteractionResponse.from_dict(result)
    return result


class InteractionWebhook:
    """Verifies, decodes and answers Discord interaction requests."""

    def __init__(self, credentials: Credentials, dispatcher: InteractionDispatcher, logger=None):
        self.credentials = credentials
        self.dispatcher = dispatcher
        self.logger = logger or get_logger('picasso-sdk.webhook')

    @traced_function("discord_interaction")
    async def handle(self, req) -> Response:
        """Answer one interaction request.

        Args:
            req: Request exposing ``headers`` and ``get_data()``

        Returns:
            Response to send back to Discord
        """
        correlation_id = _correlation_id(req)

        signature = req.headers.get(SIGNATURE_HEADER)
        timestamp = req.headers.get(TIMESTAMP_HEADER)
        body = req.get_data()

        if not signature or not timestamp:
            self.logger.warning("Missing Discord signature headers", correlation_id=correlation_id)
            return _text_response('Forbidden', 403)

        if not verify_signature(signature, timestamp, body, self.credentials.public_key):
            self.logger.warning("Invalid Discord signature", correlation_id=correlation_id)
            return _text_response('Invalid request signature', 401)

        try:
            interaction = self.dispatcher.decode(body)

            self.logger.info(
                "Processing Discord interaction",
                correlation_id=correlation_id,
                interaction_type=int(interaction.type),
                interaction_id=interaction.id
            )

            result = await self.dispatcher.dispatch(interaction)
            payload = json.dumps(_response_body(result))
        except Exception as e:
            self.logger.error(
                "Failed to process Discord interaction",
                error=e,
                correlation_id=correlation_id
            )
            return _text_response('Internal server error', 500)

        return Response(payload, status=200, mimetype='application/json')


def register_routes(app: Flask, webhook: InteractionWebhook, path: str = '/discord/interactions'):
    """Register the interactions endpoint and a health check."""

    @app.route('/health')
    def health():
        """Health check endpoint."""
        return jsonify({
            'status': 'healthy',
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'service': 'discord-bot',
            'environment': webhook.credentials.status()
        })

    @app.route(path, methods=['POST'])
    async def discord_interactions():
        """Handle Discord interactions endpoint."""
        return await webhook.handle(request)


def create_app(webhook: InteractionWebhook, service_name: str = 'picasso-bot',
               path: str = '/discord/interactions') -> Flask:
    """Build a Flask app serving the interactions endpoint."""
    app = Flask(__name__)
    logger, _ = init_observability(service_name, app=app)
    add_correlation_middleware(app, logger)
    register_routes(app, webhook, path)
    return app
