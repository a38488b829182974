"""Tests for the command/component registry."""
import pytest

from picasso_sdk.errors import UnknownCommandError, UnknownComponentError
from picasso_sdk.registry import Command, CommandRegistry


class TestCommandRegistry:
    def test_decorator_registers_and_returns_function(self, registry):
        @registry.command('ping', 'Test bot latency')
        def handle_ping(interaction):
            return {'type': 4}

        assert registry.get_command('ping').exec is handle_ping
        assert handle_ping(None) == {'type': 4}

    def test_unknown_command_raises(self, registry):
        with pytest.raises(UnknownCommandError) as excinfo:
            registry.get_command('nope')
        assert excinfo.value.name == 'nope'

    def test_unknown_component_raises(self, registry):
        with pytest.raises(UnknownComponentError):
            registry.get_component('nope')

    def test_duplicate_command_is_rejected(self, registry):
        registry.add_command(Command('ping', 'one', lambda i: None))
        with pytest.raises(ValueError):
            registry.add_command(Command('ping', 'two', lambda i: None))

    def test_duplicate_component_is_rejected(self, registry):
        registry.component('confirm')(lambda i: None)
        with pytest.raises(ValueError):
            registry.component('confirm')(lambda i: None)

    def test_autocomplete_attaches_to_command(self, registry):
        registry.command('draw', 'Draw a pixel')(lambda i: None)

        @registry.autocomplete('draw')
        def complete(interaction):
            return None

        assert registry.get_command('draw').autocomplete is complete

    def test_autocomplete_for_unknown_command_raises(self, registry):
        with pytest.raises(UnknownCommandError):
            registry.autocomplete('draw')(lambda i: None)

    def test_command_definitions_strip_handlers(self, registry):
        options = [{'name': 'x', 'description': 'X coordinate', 'type': 4, 'required': True}]
        registry.command('draw', 'Draw a pixel', options=options)(lambda i: None)
        registry.command('ping', 'Test bot latency')(lambda i: None)

        assert registry.command_definitions() == [
            {'name': 'draw', 'description': 'Draw a pixel', 'options': options},
            {'name': 'ping', 'description': 'Test bot latency'},
        ]

    def test_registries_are_independent(self):
        first, second = CommandRegistry(), CommandRegistry()
        first.command('ping', 'Test bot latency')(lambda i: None)
        assert second.commands == []
