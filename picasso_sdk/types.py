"""Discord object shapes used by the webhook responder and the REST client.

Payloads travelling to and from the REST API stay plain dicts and are
described with TypedDicts. Inbound interactions are decoded into frozen
dataclasses so a handler only ever sees the payload shape matching the
interaction type.
"""
from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from typing import Any, Dict, List, Optional, Tuple, TypedDict, Union

from .errors import InteractionDecodeError, InvalidResponseError


# --- Enumerations ---

class InteractionType(IntEnum):
    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3
    APPLICATION_COMMAND_AUTOCOMPLETE = 4
    MODAL_SUBMIT = 5


class InteractionResponseType(IntEnum):
    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5
    DEFERRED_UPDATE_MESSAGE = 6
    UPDATE_MESSAGE = 7
    APPLICATION_COMMAND_AUTOCOMPLETE_RESULT = 8
    MODAL = 9


class ApplicationCommandType(IntEnum):
    CHAT_INPUT = 1
    USER = 2
    MESSAGE = 3


class ApplicationCommandOptionType(IntEnum):
    SUB_COMMAND = 1
    SUB_COMMAND_GROUP = 2
    STRING = 3
    INTEGER = 4
    BOOLEAN = 5
    USER = 6
    CHANNEL = 7
    ROLE = 8
    MENTIONABLE = 9
    NUMBER = 10
    ATTACHMENT = 11


class ComponentType(IntEnum):
    ACTION_ROW = 1
    BUTTON = 2
    STRING_SELECT = 3
    TEXT_INPUT = 4
    USER_SELECT = 5
    ROLE_SELECT = 6
    MENTIONABLE_SELECT = 7
    CHANNEL_SELECT = 8


class ButtonStyle(IntEnum):
    PRIMARY = 1
    SECONDARY = 2
    SUCCESS = 3
    DANGER = 4
    LINK = 5


class TextInputStyle(IntEnum):
    SHORT = 1
    PARAGRAPH = 2


class ChannelType(IntEnum):
    GUILD_TEXT = 0
    DM = 1
    GUILD_VOICE = 2
    GROUP_DM = 3
    GUILD_CATEGORY = 4
    GUILD_NEWS = 5
    GUILD_STORE = 6
    GUILD_NEWS_THREAD = 10
    GUILD_PUBLIC_THREAD = 11
    GUILD_PRIVATE_THREAD = 12
    GUILD_STAGE_VOICE = 13


class PermissionType(IntEnum):
    ROLE = 1
    USER = 2
    CHANNEL = 3


class MessageFlags(IntFlag):
    CROSSPOSTED = 1 << 0
    IS_CROSSPOST = 1 << 1
    SUPPRESS_EMBEDS = 1 << 2
    SOURCE_MESSAGE_DELETED = 1 << 3
    URGENT = 1 << 4
    HAS_THREAD = 1 << 5
    EPHEMERAL = 1 << 6
    LOADING = 1 << 7


# --- REST payload shapes ---

Localization = Dict[str, str]


class User(TypedDict, total=False):
    id: str
    username: str
    discriminator: str
    global_name: Optional[str]
    avatar: Optional[str]
    bot: bool
    system: bool
    mfa_enabled: bool
    locale: str
    verified: bool
    email: Optional[str]
    flags: int
    premium_type: int
    public_flags: int


class Role(TypedDict, total=False):
    id: str
    name: str
    color: int
    hoist: bool
    position: int
    permissions: str
    managed: bool
    mentionable: bool


class GuildMember(TypedDict, total=False):
    user: User
    nick: Optional[str]
    roles: List[str]
    joined_at: str
    premium_since: Optional[str]
    deaf: bool
    mute: bool
    pending: bool
    permissions: str


class Emoji(TypedDict, total=False):
    id: Optional[str]
    name: Optional[str]
    animated: bool


class PermissionOverwrite(TypedDict):
    id: str
    type: int
    allow: str
    deny: str


class ThreadMetadata(TypedDict, total=False):
    archived: bool
    auto_archive_duration: int
    archive_timestamp: str
    locked: bool


class ThreadMember(TypedDict, total=False):
    id: str
    user_id: str
    join_timestamp: str
    flags: int


class Channel(TypedDict, total=False):
    id: str
    type: int
    guild_id: str
    position: int
    permission_overwrites: List[PermissionOverwrite]
    name: Optional[str]
    topic: Optional[str]
    nsfw: bool
    last_message_id: Optional[str]
    bitrate: int
    user_limit: int
    rate_limit_per_user: int
    recipients: List[User]
    icon: Optional[str]
    owner_id: str
    application_id: str
    parent_id: Optional[str]
    last_pin_timestamp: Optional[str]
    rtc_region: Optional[str]
    video_quality_mode: int
    message_count: int
    member_count: int
    thread_metadata: ThreadMetadata
    member: ThreadMember
    default_auto_archive_duration: int


class EmbedFooter(TypedDict, total=False):
    text: str
    icon_url: str
    proxy_icon_url: str


class EmbedMedia(TypedDict, total=False):
    url: str
    proxy_url: str
    height: int
    width: int


class EmbedProvider(TypedDict, total=False):
    name: str
    url: str


class EmbedAuthor(TypedDict, total=False):
    name: str
    url: str
    icon_url: str
    proxy_icon_url: str


class EmbedField(TypedDict, total=False):
    name: str
    value: str
    inline: bool


class Embed(TypedDict, total=False):
    title: str
    type: str
    description: str
    url: str
    timestamp: str
    color: int
    footer: EmbedFooter
    image: EmbedMedia
    thumbnail: EmbedMedia
    video: EmbedMedia
    provider: EmbedProvider
    author: EmbedAuthor
    fields: List[EmbedField]


class AllowedMentions(TypedDict, total=False):
    parse: List[str]
    roles: List[str]
    users: List[str]
    replied_user: bool


class Attachment(TypedDict, total=False):
    id: str
    filename: str
    description: str
    content_type: str
    size: int
    url: str
    proxy_url: str
    height: Optional[int]
    width: Optional[int]
    ephemeral: bool


class Button(TypedDict, total=False):
    type: int
    style: int
    label: str
    emoji: Emoji
    custom_id: str
    url: str
    disabled: bool


class SelectMenuOption(TypedDict, total=False):
    label: str
    value: str
    description: str
    emoji: Emoji
    default: bool


class SelectMenu(TypedDict, total=False):
    type: int
    custom_id: str
    options: List[SelectMenuOption]
    channel_types: List[int]
    placeholder: str
    min_values: int
    max_values: int
    disabled: bool


class TextInput(TypedDict, total=False):
    type: int
    custom_id: str
    style: int
    label: str
    min_length: int
    max_length: int
    required: bool
    value: str
    placeholder: str


class ActionRow(TypedDict):
    type: int
    components: List[Union[Button, SelectMenu, TextInput]]


class Message(TypedDict, total=False):
    id: str
    channel_id: str
    guild_id: str
    author: User
    content: str
    timestamp: str
    edited_timestamp: Optional[str]
    tts: bool
    embeds: List[Embed]
    attachments: List[Attachment]
    components: List[ActionRow]
    flags: int


class MessageCreate(TypedDict, total=False):
    content: str
    tts: bool
    embeds: List[Embed]
    allowed_mentions: AllowedMentions
    components: List[ActionRow]
    sticker_ids: List[str]
    flags: int


class InteractionResponseData(TypedDict, total=False):
    tts: bool
    content: str
    embeds: List[Embed]
    allowed_mentions: AllowedMentions
    flags: int
    components: List[ActionRow]
    attachments: List[Attachment]
    choices: List["ApplicationCommandOptionChoice"]
    custom_id: str
    title: str


class ApplicationCommandOptionChoice(TypedDict, total=False):
    name: str
    name_localizations: Localization
    value: Union[str, int, float]


class ApplicationCommandOption(TypedDict, total=False):
    type: int
    name: str
    name_localizations: Localization
    description: str
    description_localizations: Localization
    required: bool
    choices: List[ApplicationCommandOptionChoice]
    options: List["ApplicationCommandOption"]
    channel_types: List[int]
    min_value: Union[int, float]
    max_value: Union[int, float]
    min_length: int
    max_length: int
    autocomplete: bool


class CreateApplicationCommand(TypedDict, total=False):
    name: str
    name_localizations: Localization
    description: str
    description_localizations: Localization
    type: int
    options: List[ApplicationCommandOption]
    default_member_permissions: Optional[str]
    dm_permission: bool
    nsfw: bool


class ApplicationCommand(CreateApplicationCommand, total=False):
    id: str
    application_id: str
    guild_id: str
    version: str


class ApplicationCommandPermission(TypedDict):
    id: str
    type: int
    permission: bool


class GuildApplicationCommandPermissions(TypedDict):
    id: str
    application_id: str
    guild_id: str
    permissions: List[ApplicationCommandPermission]


class Application(TypedDict, total=False):
    id: str
    name: str
    icon: Optional[str]
    description: str
    rpc_origins: List[str]
    bot_public: bool
    bot_require_code_grant: bool
    terms_of_service_url: str
    privacy_policy_url: str
    owner: User
    verify_key: str
    guild_id: str
    primary_sku_id: str
    slug: str
    cover_image: str


# --- Decoded interactions ---

def _require(payload: Dict[str, Any], key: str, kind: str) -> Any:
    value = payload.get(key)
    if value is None or value == '':
        raise InteractionDecodeError(f"{kind} interaction data is missing {key!r}")
    return value


@dataclass(frozen=True)
class ApplicationCommandData:
    """Payload of APPLICATION_COMMAND and APPLICATION_COMMAND_AUTOCOMPLETE."""

    id: str
    name: str
    type: int = ApplicationCommandType.CHAT_INPUT
    options: Tuple[Dict[str, Any], ...] = ()
    resolved: Dict[str, Any] = field(default_factory=dict)
    target_id: Optional[str] = None
    guild_id: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ApplicationCommandData":
        return cls(
            id=str(payload.get('id', '')),
            name=_require(payload, 'name', 'Command'),
            type=payload.get('type', ApplicationCommandType.CHAT_INPUT),
            options=tuple(payload.get('options') or ()),
            resolved=payload.get('resolved') or {},
            target_id=payload.get('target_id'),
            guild_id=payload.get('guild_id'),
        )

    def _walk_options(self):
        stack = list(self.options)
        while stack:
            option = stack.pop(0)
            yield option
            stack.extend(option.get('options') or ())

    def get_option(self, name: str, default: Any = None) -> Any:
        """Value of the named option, looking through subcommands."""
        for option in self._walk_options():
            if option.get('name') == name and 'value' in option:
                return option['value']
        return default

    def focused_option(self) -> Optional[Dict[str, Any]]:
        """The option the user is typing into during autocomplete."""
        for option in self._walk_options():
            if option.get('focused'):
                return option
        return None


@dataclass(frozen=True)
class MessageComponentData:
    """Payload of MESSAGE_COMPONENT."""

    custom_id: str
    component_type: int
    values: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "MessageComponentData":
        return cls(
            custom_id=_require(payload, 'custom_id', 'Component'),
            component_type=payload.get('component_type', ComponentType.BUTTON),
            values=tuple(payload.get('values') or ()),
        )


@dataclass(frozen=True)
class ModalSubmitData:
    """Payload of MODAL_SUBMIT."""

    custom_id: str
    components: Tuple[Dict[str, Any], ...] = ()

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ModalSubmitData":
        return cls(
            custom_id=_require(payload, 'custom_id', 'Modal'),
            components=tuple(payload.get('components') or ()),
        )

    def values(self) -> Dict[str, str]:
        """Submitted text input values keyed by their custom_id."""
        submitted = {}
        for row in self.components:
            for component in row.get('components') or ():
                if 'custom_id' in component:
                    submitted[component['custom_id']] = component.get('value', '')
        return submitted


InteractionData = Union[ApplicationCommandData, MessageComponentData, ModalSubmitData]

_DATA_DECODERS = {
    InteractionType.APPLICATION_COMMAND: ApplicationCommandData,
    InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE: ApplicationCommandData,
    InteractionType.MESSAGE_COMPONENT: MessageComponentData,
    InteractionType.MODAL_SUBMIT: ModalSubmitData,
}


@dataclass(frozen=True)
class Interaction:
    """An inbound interaction, decoded once per request."""

    id: str
    application_id: str
    type: Union[InteractionType, int]
    token: str
    data: Optional[InteractionData] = None
    guild_id: Optional[str] = None
    channel_id: Optional[str] = None
    member: Optional[GuildMember] = None
    user: Optional[User] = None
    message: Optional[Message] = None
    locale: Optional[str] = None
    version: int = 1
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, payload: Any) -> "Interaction":
        """Decode an interaction payload.

        The ``data`` shape is picked from ``type``; an unknown type keeps its
        raw integer value and no data so the dispatcher can reject it.
        """
        if not isinstance(payload, dict):
            raise InteractionDecodeError("Interaction payload must be a JSON object")

        raw_type = payload.get('type')
        if not isinstance(raw_type, int) or isinstance(raw_type, bool):
            raise InteractionDecodeError(f"Interaction type must be an integer, got {raw_type!r}")

        try:
            interaction_type = InteractionType(raw_type)
        except ValueError:
            interaction_type = raw_type

        data = None
        decoder = _DATA_DECODERS.get(interaction_type)
        if decoder is not None:
            raw_data = payload.get('data')
            if not isinstance(raw_data, dict):
                raise InteractionDecodeError(
                    f"{InteractionType(interaction_type).name} interaction has no data object"
                )
            data = decoder.from_dict(raw_data)

        return cls(
            id=str(payload.get('id', '')),
            application_id=str(payload.get('application_id', '')),
            type=interaction_type,
            token=payload.get('token', ''),
            data=data,
            guild_id=payload.get('guild_id'),
            channel_id=payload.get('channel_id'),
            member=payload.get('member'),
            user=payload.get('user'),
            message=payload.get('message'),
            locale=payload.get('locale'),
            version=payload.get('version', 1),
            raw=payload,
        )

    @property
    def user_id(self) -> Optional[str]:
        """Id of the invoking user, in a guild or in DMs."""
        member = self.member or {}
        user = member.get('user') or self.user or {}
        return user.get('id')


# --- Responses ---

@dataclass(frozen=True)
class InteractionResponse:
    """The body returned to Discord for an interaction."""

    type: InteractionResponseType
    data: Optional[InteractionResponseData] = None

    def __post_init__(self):
        try:
            response_type = InteractionResponseType(self.type)
        except ValueError:
            raise InvalidResponseError(f"Unknown interaction response type: {self.type!r}") from None
        object.__setattr__(self, 'type', response_type)

        if response_type is InteractionResponseType.PONG and self.data is not None:
            raise InvalidResponseError("A PONG response must not carry data")

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "InteractionResponse":
        return cls(type=payload['type'], data=payload.get('data'))

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {'type': int(self.type)}
        if self.data is not None:
            body['data'] = dict(self.data)
        return body
