"""Builders for interaction responses, components and embeds."""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from .types import (
    ActionRow,
    ApplicationCommandOptionChoice,
    Button,
    ButtonStyle,
    ComponentType,
    Embed,
    Emoji,
    InteractionResponse,
    InteractionResponseData,
    InteractionResponseType,
    MessageFlags,
    SelectMenu,
    SelectMenuOption,
    TextInput,
    TextInputStyle,
)

# Color constants
COLOR_SUCCESS = 0x00FF00
COLOR_INFO = 0x0066CC
COLOR_ERROR = 0xFF4C4C

MessageLike = Union[str, InteractionResponseData]


def _message_data(message: MessageLike) -> InteractionResponseData:
    if isinstance(message, str):
        return {'content': message}
    return dict(message)


# --- Interaction responses ---

def pong_response() -> InteractionResponse:
    return InteractionResponse(InteractionResponseType.PONG)


def message_response(message: MessageLike) -> InteractionResponse:
    """Reply to the interaction with a message."""
    return InteractionResponse(InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE, _message_data(message))


def ephemeral_response(
    message: MessageLike,
    response_type: InteractionResponseType = InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE,
) -> InteractionResponse:
    """Reply with a message only the invoking user can see.

    Flags already set on the message are kept.
    """
    data = _message_data(message)
    data['flags'] = int(MessageFlags(data.get('flags', 0)) | MessageFlags.EPHEMERAL)
    return InteractionResponse(response_type, data)


def deferred_response(ephemeral: bool = False) -> InteractionResponse:
    """Acknowledge now; send the message later through the interaction token."""
    data = {'flags': int(MessageFlags.EPHEMERAL)} if ephemeral else None
    return InteractionResponse(InteractionResponseType.DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE, data)


def deferred_update_response() -> InteractionResponse:
    return InteractionResponse(InteractionResponseType.DEFERRED_UPDATE_MESSAGE)


def update_message_response(message: MessageLike) -> InteractionResponse:
    """Edit the message the component is attached to."""
    return InteractionResponse(InteractionResponseType.UPDATE_MESSAGE, _message_data(message))


def autocomplete_response(choices: List[ApplicationCommandOptionChoice]) -> InteractionResponse:
    return InteractionResponse(
        InteractionResponseType.APPLICATION_COMMAND_AUTOCOMPLETE_RESULT,
        {'choices': list(choices)[:25]},
    )


def modal_response(custom_id: str, title: str, components: List[ActionRow]) -> InteractionResponse:
    return InteractionResponse(
        InteractionResponseType.MODAL,
        {'custom_id': custom_id, 'title': title, 'components': list(components)},
    )


# --- Components ---

def action_row(components: List[Union[Button, SelectMenu, TextInput]]) -> ActionRow:
    return {'type': ComponentType.ACTION_ROW, 'components': list(components)}


def button(
    custom_id: str,
    label: Optional[str] = None,
    style: ButtonStyle = ButtonStyle.PRIMARY,
    emoji: Optional[Emoji] = None,
    disabled: bool = False,
) -> Button:
    component: Button = {'type': ComponentType.BUTTON, 'style': style, 'custom_id': custom_id}
    if label:
        component['label'] = label
    if emoji:
        component['emoji'] = emoji
    if disabled:
        component['disabled'] = True
    return component


def link_button(url: str, label: str, emoji: Optional[Emoji] = None) -> Button:
    """Button opening a URL; link buttons carry no custom_id."""
    component: Button = {'type': ComponentType.BUTTON, 'style': ButtonStyle.LINK, 'url': url, 'label': label}
    if emoji:
        component['emoji'] = emoji
    return component


def select_option(label: str, value: str, description: Optional[str] = None, default: bool = False) -> SelectMenuOption:
    option: SelectMenuOption = {'label': label, 'value': value}
    if description:
        option['description'] = description
    if default:
        option['default'] = True
    return option


def select_menu(
    custom_id: str,
    options: List[SelectMenuOption],
    placeholder: Optional[str] = None,
    min_values: int = 1,
    max_values: int = 1,
) -> SelectMenu:
    component: SelectMenu = {
        'type': ComponentType.STRING_SELECT,
        'custom_id': custom_id,
        'options': list(options),
        'min_values': min_values,
        'max_values': max_values,
    }
    if placeholder:
        component['placeholder'] = placeholder
    return component


def text_input(
    custom_id: str,
    label: str,
    style: TextInputStyle = TextInputStyle.SHORT,
    required: bool = True,
    placeholder: Optional[str] = None,
    value: Optional[str] = None,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
) -> TextInput:
    component: TextInput = {
        'type': ComponentType.TEXT_INPUT,
        'custom_id': custom_id,
        'style': style,
        'label': label,
        'required': required,
    }
    optional = {'placeholder': placeholder, 'value': value, 'min_length': min_length, 'max_length': max_length}
    component.update({key: val for key, val in optional.items() if val is not None})
    return component


# --- Embeds ---

def create_embed(
    title: str,
    description: str = None,
    color: int = COLOR_INFO,
    fields: List[Dict[str, Any]] = None,
    footer: Dict[str, str] = None,
    thumbnail: Dict[str, str] = None,
    image: Dict[str, str] = None,
    author: Dict[str, str] = None,
    timestamp: bool = True
) -> Embed:
    """Create a Discord embed with consistent formatting.

    Args:
        title: Embed title
        description: Embed description
        color: Embed color (hex integer)
        fields: List of field dicts with 'name', 'value', 'inline' keys
        footer: Footer dict with 'text' key
        thumbnail: Thumbnail dict with 'url' key
        image: Image dict with 'url' key
        author: Author dict with 'name' and optionally 'icon_url'
        timestamp: Whether to include timestamp (default: True)

    Returns:
        Discord embed dict
    """
    embed: Embed = {
        'title': title,
        'color': color
    }

    optional = {
        'description': description,
        'fields': fields,
        'footer': footer,
        'thumbnail': thumbnail,
        'image': image,
        'author': author,
    }
    embed.update({key: value for key, value in optional.items() if value})

    if timestamp:
        embed['timestamp'] = datetime.now(timezone.utc).isoformat()

    return embed


def embed_response(embed: Embed, ephemeral: bool = False, content: str = None) -> InteractionResponse:
    """Reply with a single embed, optionally alongside text content."""
    data: InteractionResponseData = {'embeds': [embed]}
    if content:
        data['content'] = content
    if ephemeral:
        return ephemeral_response(data)
    return message_response(data)


def create_error_embed(title: str, description: str, ephemeral: bool = True) -> InteractionResponse:
    """Create an error embed response with consistent styling."""
    embed = create_embed(title=f'Error: {title}', description=description, color=COLOR_ERROR)
    return embed_response(embed, ephemeral=ephemeral)


def create_success_embed(title: str, description: str = None, ephemeral: bool = False, **kwargs) -> InteractionResponse:
    embed = create_embed(title=title, description=description, color=COLOR_SUCCESS, **kwargs)
    return embed_response(embed, ephemeral=ephemeral)


def create_info_embed(title: str, description: str = None, ephemeral: bool = False, **kwargs) -> InteractionResponse:
    embed = create_embed(title=title, description=description, color=COLOR_INFO, **kwargs)
    return embed_response(embed, ephemeral=ephemeral)
