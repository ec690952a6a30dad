"""Mention resolution and formatting policies.

A resolver maps the `username` of an `@username` run found in Markdown to the account the mention
refers to. A formatter does the opposite when an ADF mention node is rendered back to Markdown.
"""

from collections.abc import Mapping
from typing import Literal

from markdown_adf.constants import MENTION_PATTERN, MENTION_WITH_ID_PATTERN
from markdown_adf.models import MentionFormatter, MentionInfo, MentionResolver


def default_mention_resolver(username: str) -> MentionInfo:
    """Use the username itself as the account id."""
    return MentionInfo(id=username, text=f'@{username}')


def default_mention_formatter(id: str, text: str | None = None) -> str:
    """Render a mention as `@name`.

    Args:
        id: the account id of the mentioned user
        text: the display text stored in the mention node, if any

    Returns:
        The display text if it is already `@`-prefixed, the `@`-prefixed display text otherwise, or
        `@id` when there is no display text.
    """
    if text:
        if text.startswith('@'):
            return text
        return f'@{text}'
    return f'@{id}'


def parse_mention(mention: str) -> dict[str, str] | None:
    """Parse a mention written as `@username` or `@[Display Name](account-id)`.

    Returns:
        `{'display_name': ..., 'id': ...}` for the linked form, `{'username': ...}` for the simple
        form, or None when the string holds no mention.
    """
    if match := MENTION_WITH_ID_PATTERN.search(mention):
        return {'display_name': match.group(1), 'id': match.group(2)}
    if match := MENTION_PATTERN.search(mention):
        return {'username': match.group(1)}
    return None


def create_mention_resolver(user_mapping: Mapping[str, str]) -> MentionResolver:
    """Create a resolver backed by a username -> account id mapping.

    Lookups are case-insensitive. Unknown users resolve to None so the converter keeps the
    original `@username` text.
    """
    accounts = {username.lower(): account_id for username, account_id in user_mapping.items()}

    def resolve(username: str) -> MentionInfo | None:
        if account_id := accounts.get(username.lower()):
            return MentionInfo(id=account_id, text=f'@{username}')
        return None

    return resolve


def create_mention_formatter(
    format: Literal['simple', 'linked', 'display'] = 'simple',
) -> MentionFormatter:
    """Create a formatter.

    - `simple`: `@Display Name` (the default formatter)
    - `linked`: `@[Display Name](account-id)`, the form understood by `parse_mention`
    - `display`: the stored display text as-is, `@unknown` without one
    """
    if format == 'linked':
        return lambda id, text=None: f'@[{(text or id).removeprefix("@")}]({id})'
    if format == 'display':
        return lambda id, text=None: text or '@unknown'
    return default_mention_formatter
