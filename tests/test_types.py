"""Tests for interaction decoding and response validation."""
import pytest

from picasso_sdk.errors import InteractionDecodeError, InvalidResponseError
from picasso_sdk.types import (
    ApplicationCommandData,
    Interaction,
    InteractionResponse,
    InteractionResponseType,
    InteractionType,
    MessageComponentData,
    ModalSubmitData,
)

from .payloads import command_payload, component_payload


class TestInteractionDecoding:
    def test_ping_has_no_data(self):
        interaction = Interaction.from_dict({'type': 1, 'id': '1', 'data': {'name': 'ignored'}})
        assert interaction.type is InteractionType.PING
        assert interaction.data is None

    def test_command_data_shape(self):
        interaction = Interaction.from_dict(command_payload('draw'))
        assert isinstance(interaction.data, ApplicationCommandData)
        assert interaction.data.name == 'draw'
        assert interaction.token == 'interaction-token'

    def test_autocomplete_uses_command_data(self):
        interaction = Interaction.from_dict(command_payload('draw', interaction_type=4))
        assert interaction.type is InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE
        assert isinstance(interaction.data, ApplicationCommandData)

    def test_component_data_shape(self):
        interaction = Interaction.from_dict(component_payload('confirm'))
        assert isinstance(interaction.data, MessageComponentData)
        assert interaction.data.custom_id == 'confirm'

    def test_modal_data_shape(self):
        payload = component_payload('feedback', interaction_type=5)
        payload['data']['components'] = [
            {'type': 1, 'components': [{'type': 4, 'custom_id': 'comment', 'value': 'nice'}]},
        ]
        interaction = Interaction.from_dict(payload)
        assert isinstance(interaction.data, ModalSubmitData)
        assert interaction.data.values() == {'comment': 'nice'}

    def test_command_without_name_is_rejected(self):
        payload = command_payload('draw')
        del payload['data']['name']
        with pytest.raises(InteractionDecodeError):
            Interaction.from_dict(payload)

    def test_component_without_custom_id_is_rejected(self):
        payload = component_payload('x')
        del payload['data']['custom_id']
        with pytest.raises(InteractionDecodeError):
            Interaction.from_dict(payload)

    def test_command_without_data_is_rejected(self):
        payload = command_payload('draw')
        del payload['data']
        with pytest.raises(InteractionDecodeError):
            Interaction.from_dict(payload)

    def test_non_object_payload_is_rejected(self):
        with pytest.raises(InteractionDecodeError):
            Interaction.from_dict([1, 2])

    def test_non_integer_type_is_rejected(self):
        with pytest.raises(InteractionDecodeError):
            Interaction.from_dict({'type': 'PING'})

    def test_unknown_type_is_kept_raw(self):
        interaction = Interaction.from_dict({'type': 42})
        assert interaction.type == 42
        assert interaction.data is None

    def test_user_id_from_member_or_user(self):
        assert Interaction.from_dict(command_payload('draw')).user_id == '42'
        assert Interaction.from_dict(component_payload('x')).user_id == '43'

    def test_get_option_searches_subcommands(self):
        options = [{'name': 'pixel', 'type': 1, 'options': [{'name': 'x', 'type': 4, 'value': 7}]}]
        data = Interaction.from_dict(command_payload('draw', options=options)).data
        assert data.get_option('x') == 7
        assert data.get_option('missing', 'default') == 'default'

    def test_focused_option(self):
        options = [
            {'name': 'color', 'type': 3, 'value': 're', 'focused': True},
            {'name': 'x', 'type': 4, 'value': 1},
        ]
        data = Interaction.from_dict(command_payload('draw', options=options, interaction_type=4)).data
        assert data.focused_option()['name'] == 'color'


class TestInteractionResponse:
    def test_pong_serializes_without_data(self):
        assert InteractionResponse(InteractionResponseType.PONG).to_dict() == {'type': 1}

    def test_pong_with_data_is_rejected(self):
        with pytest.raises(InvalidResponseError):
            InteractionResponse(InteractionResponseType.PONG, {'content': 'no'})

    def test_int_type_is_coerced(self):
        response = InteractionResponse(4, {'content': 'hi'})
        assert response.type is InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE
        assert response.to_dict() == {'type': 4, 'data': {'content': 'hi'}}

    def test_unknown_type_is_rejected(self):
        with pytest.raises(InvalidResponseError):
            InteractionResponse(3)

    def test_from_dict(self):
        response = InteractionResponse.from_dict({'type': 7, 'data': {'content': 'edited'}})
        assert response.type is InteractionResponseType.UPDATE_MESSAGE
