"""Registry of Discord command and component handlers.

Handlers are registered explicitly at startup and looked up by the name or
custom_id carried in the interaction payload::

    registry = CommandRegistry()

    @registry.command('ping', 'Check the bot is alive')
    def handle_ping(interaction):
        return message_response('Pong!')
"""
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from .errors import UnknownCommandError, UnknownComponentError
from .types import CreateApplicationCommand, InteractionResponse

HandlerResult = Union[InteractionResponse, Dict[str, Any]]
Handler = Callable[..., Union[HandlerResult, Awaitable[HandlerResult]]]


@dataclass
class Command:
    """A slash/context-menu command and its handlers."""

    name: str
    description: str
    exec: Handler
    autocomplete: Optional[Handler] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def definition(self) -> CreateApplicationCommand:
        """Registration payload for Discord, without the handlers."""
        definition: CreateApplicationCommand = {
            'name': self.name,
            'description': self.description,
        }
        definition.update(self.metadata)
        return definition


@dataclass
class Component:
    """A message component or modal, addressed by custom_id."""

    custom_id: str
    exec: Handler
    metadata: Dict[str, Any] = field(default_factory=dict)


class CommandRegistry:
    """Maps command names and component custom ids to handlers."""

    def __init__(self):
        self._commands: Dict[str, Command] = {}
        self._components: Dict[str, Component] = {}

    def add_command(self, command: Command) -> Command:
        if command.name in self._commands:
            raise ValueError(f"Command {command.name!r} is already registered")
        self._commands[command.name] = command
        return command

    def add_component(self, component: Component) -> Component:
        if component.custom_id in self._components:
            raise ValueError(f"Component {component.custom_id!r} is already registered")
        self._components[component.custom_id] = component
        return component

    def command(self, name: str, description: str, **metadata):
        """Decorator to register a command handler."""
        def decorator(func):
            self.add_command(Command(name, description, func, metadata=metadata))
            return func
        return decorator

    def autocomplete(self, name: str):
        """Decorator to attach an autocomplete handler to a registered command."""
        def decorator(func):
            self.get_command(name).autocomplete = func
            return func
        return decorator

    def component(self, custom_id: str, **metadata):
        """Decorator to register a component handler."""
        def decorator(func):
            self.add_component(Component(custom_id, func, metadata=metadata))
            return func
        return decorator

    def get_command(self, name: str) -> Command:
        try:
            return self._commands[name]
        except KeyError:
            raise UnknownCommandError(name) from None

    def get_component(self, custom_id: str) -> Component:
        try:
            return self._components[custom_id]
        except KeyError:
            raise UnknownComponentError(custom_id) from None

    @property
    def commands(self) -> List[Command]:
        return list(self._commands.values())

    @property
    def components(self) -> List[Component]:
        return list(self._components.values())

    def command_definitions(self) -> List[CreateApplicationCommand]:
        """Definitions of every registered command, for bulk registration."""
        return [command.definition() for command in self._commands.values()]
