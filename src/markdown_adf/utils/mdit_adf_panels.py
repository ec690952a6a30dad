from __future__ import annotations

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.token import Token

from markdown_adf.constants import ALERT_MARKER_PATTERN, ALERT_TO_PANEL_TYPE


def panels_plugin(md: MarkdownIt) -> None:
    """Detect GitHub-style alert blockquotes and tag them with the ADF panel type.

    The `blockquote_open` token of an alert gets `meta['panel_type']` (info, success, note, warning or
    error) and the `[!TYPE]` marker is removed from its first paragraph. A paragraph left empty by the
    removal is dropped.
    """

    def process_alerts(state: StateCore) -> None:
        tokens = state.tokens
        i = 0

        while i < len(tokens):
            token = tokens[i]

            if token.type == 'blockquote_open' and is_alert_blockquote(tokens, i):
                inline_token = tokens[i + 2]
                match = ALERT_MARKER_PATTERN.match(inline_token.content)
                token.meta = {**(token.meta or {}), 'panel_type': ALERT_TO_PANEL_TYPE[match.group(1)]}

                strip_alert_marker(inline_token)

                if not inline_token.children:
                    del tokens[i + 1 : i + 4]

            i += 1

    def is_alert_blockquote(tokens: list[Token], start_index: int) -> bool:
        if start_index + 2 >= len(tokens):
            return False
        if tokens[start_index + 1].type != 'paragraph_open':
            return False
        inline_token = tokens[start_index + 2]
        return inline_token.type == 'inline' and bool(
            ALERT_MARKER_PATTERN.match(inline_token.content)
        )

    def strip_alert_marker(inline_token: Token) -> None:
        children = list(inline_token.children or [])

        if children and children[0].type == 'text':
            first = children[0]
            remaining = ALERT_MARKER_PATTERN.sub('', first.content, count=1).lstrip()

            if remaining:
                first.content = remaining
            else:
                children.pop(0)
                if children and children[0].type in ('softbreak', 'hardbreak'):
                    children.pop(0)

        inline_token.children = children
        inline_token.content = ALERT_MARKER_PATTERN.sub('', inline_token.content, count=1).lstrip()

    md.core.ruler.after('inline', 'github-alerts', process_alerts)
