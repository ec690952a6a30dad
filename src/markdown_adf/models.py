import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable


def custom_as_dict_factory(data) -> dict:
    def convert_value(obj):
        if isinstance(obj, Enum):
            return obj.value
        if callable(obj):
            return getattr(obj, '__name__', repr(obj))
        return obj

    return {k: convert_value(v) for k, v in data}


class SmartLinkType(str, Enum):
    """How a URL found in a Markdown link is rendered in ADF."""

    INLINE = 'inline'
    BLOCK = 'block'
    LINK = 'link'


class TaskState(str, Enum):
    TODO = 'TODO'
    DONE = 'DONE'


class BaseModel:
    def as_dict(self) -> dict:
        """Dumps dataclass into dictionary.

        Enums are dumped to their values and callables to their names.
        """

        return dataclasses.asdict(self, dict_factory=custom_as_dict_factory)


@dataclass(frozen=True)
class MentionInfo(BaseModel):
    id: str
    text: str | None = None


MentionResolver = Callable[[str], MentionInfo | None]
"""Maps a username typed as `@username` to the account it refers to, or None when unknown."""

MentionFormatter = Callable[[str, str | None], str]
"""Renders a mention node (account id and optional display text) as Markdown."""

SmartLinkResolver = Callable[[str], SmartLinkType | str]
"""Classifies a URL as an inline card, a block card or a plain link."""


@dataclass(frozen=True)
class MarkdownToAdfOptions(BaseModel):
    enable_smart_links: bool = True
    """When True, links are classified and Atlassian URLs become smart link cards."""
    smart_link_resolver: SmartLinkResolver | None = None
    """Replaces the built-in URL classification policy when set."""
    mention_resolver: MentionResolver | None = None
    """Replaces the default mention policy (the username is used as the account id) when set."""
    detect_alerts: bool = True
    """When True, GitHub alert blockquotes (`> [!NOTE]`) are converted to ADF panels."""
    skip_front_matter: bool = False
    """When True, a YAML front matter block (`---` fenced) at the start of the text is left out of the
    document."""


@dataclass(frozen=True)
class AdfToMarkdownOptions(BaseModel):
    mention_formatter: MentionFormatter | None = None
    """Replaces the default `@name` mention rendering when set."""
    strict: bool = False
    """When True, nodes the serializer cannot render raise `UnsupportedNodeError` instead of being
    skipped."""


@dataclass
class ValidationResult(BaseModel):
    valid: bool
    errors: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.valid
