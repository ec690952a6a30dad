import copy
import logging
from collections.abc import Iterator, Sequence

from markdown_it.token import Token

from markdown_adf.constants import INLINE_SYNTAX_PATTERN, LOGGER_NAME, MEDIA_SINGLE_LAYOUT
from markdown_adf.emojis import get_emoji_unicode, is_valid_emoji
from markdown_adf.mentions import default_mention_resolver
from markdown_adf.models import MarkdownToAdfOptions, SmartLinkType
from markdown_adf.smart_links import default_smart_link_resolver
from markdown_adf.utils.adf_helpers import create_text_node

logger = logging.getLogger(LOGGER_NAME)

_MARK_OPEN_TOKENS = {
    'strong_open': 'strong',
    'em_open': 'em',
    's_open': 'strike',
}

_MARK_CLOSE_TOKENS = {
    'strong_close': 'strong',
    'em_close': 'em',
    's_close': 'strike',
    'link_close': 'link',
}


class MarkStack:
    """The marks opened and not yet closed while walking an inline span.

    Closing a mark removes the first open mark of that type, wherever it is in the stack, so close
    tokens arriving out of order still leave the stack consistent.
    """

    def __init__(self):
        self._marks: list[dict] = []

    def __len__(self) -> int:
        return len(self._marks)

    def push(self, mark: dict) -> None:
        self._marks.append(mark)

    def remove(self, mark_type: str) -> None:
        for index, mark in enumerate(self._marks):
            if mark['type'] == mark_type:
                del self._marks[index]
                return

    def snapshot(self) -> list[dict]:
        return copy.deepcopy(self._marks)


def convert_inline_tokens(
    tokens: Sequence[Token] | None, options: MarkdownToAdfOptions
) -> list[dict]:
    """Convert markdown-it inline tokens to ADF inline nodes.

    Args:
        tokens: the children of one markdown-it `inline` token
        options: the conversion options

    Returns:
        List of ADF inline nodes. Images are returned as `mediaSingle` nodes in their position.
    """
    if not tokens:
        return []

    content: list[dict] = []
    marks = MarkStack()
    children = iter(tokens)

    for token in children:
        if token.type == 'text':
            if token.content:
                content.extend(_convert_text(token.content, marks.snapshot(), options))

        elif token.type == 'code_inline':
            content.append({'type': 'text', 'text': token.content, 'marks': [{'type': 'code'}]})

        elif token.type == 'softbreak':
            content.append({'type': 'text', 'text': ' '})

        elif token.type == 'hardbreak':
            content.append({'type': 'hardBreak'})

        elif token.type in _MARK_OPEN_TOKENS:
            marks.push({'type': _MARK_OPEN_TOKENS[token.type]})

        elif token.type in _MARK_CLOSE_TOKENS:
            marks.remove(_MARK_CLOSE_TOKENS[token.type])

        elif token.type == 'link_open':
            href = str(token.attrGet('href') or '')
            title = token.attrGet('title')

            if _classify_link(href, options) in (SmartLinkType.INLINE, SmartLinkType.BLOCK):
                # NOTE: block cards can only live at block level, inside an inline span they are
                # emitted as inline cards.
                _skip_link_span(children)
                content.append({'type': 'inlineCard', 'attrs': {'url': href}})
            else:
                attrs = {'href': href}
                if title:
                    attrs['title'] = str(title)
                marks.push({'type': 'link', 'attrs': attrs})

        elif token.type == 'image':
            content.append(_convert_image(token))

        else:
            logger.debug(f'Skipping unsupported inline markdown: {token.type}')

    return content


def _classify_link(href: str, options: MarkdownToAdfOptions) -> SmartLinkType:
    if not options.enable_smart_links:
        return SmartLinkType.LINK
    resolver = options.smart_link_resolver or default_smart_link_resolver
    return SmartLinkType(resolver(href))


def _skip_link_span(children: Iterator[Token]) -> None:
    for token in children:
        if token.type == 'link_close':
            return


def _convert_image(token: Token) -> dict:
    media_attrs = {'type': 'external', 'url': str(token.attrGet('src') or '')}

    alt = token.attrGet('alt') or token.content
    if alt:
        media_attrs['alt'] = str(alt)

    return {
        'type': 'mediaSingle',
        'attrs': {'layout': MEDIA_SINGLE_LAYOUT},
        'content': [{'type': 'media', 'attrs': media_attrs}],
    }


def _convert_text(text: str, marks: list[dict], options: MarkdownToAdfOptions) -> list[dict]:
    """Split a literal text run into text, mention and emoji nodes."""
    nodes: list[dict] = []
    last_index = 0

    for match in INLINE_SYNTAX_PATTERN.finditer(text):
        if match.start() > last_index:
            nodes.append(create_text_node(text[last_index : match.start()], marks))

        candidate = match.group(0)
        if candidate.startswith('@'):
            nodes.append(_convert_mention(candidate, marks, options))
        else:
            nodes.append(_convert_emoji(candidate, marks))

        last_index = match.end()

    if last_index < len(text):
        nodes.append(create_text_node(text[last_index:], marks))

    return nodes


def _convert_mention(candidate: str, marks: list[dict], options: MarkdownToAdfOptions) -> dict:
    username = candidate[1:]
    resolver = options.mention_resolver or default_mention_resolver
    mention = resolver(username)

    if mention is None:
        return create_text_node(candidate, marks)

    return {
        'type': 'mention',
        'attrs': {'id': mention.id, 'text': mention.text or candidate},
    }


def _convert_emoji(candidate: str, marks: list[dict]) -> dict:
    shortname = candidate[1:-1]

    if not is_valid_emoji(shortname):
        return create_text_node(candidate, marks)

    return {
        'type': 'emoji',
        'attrs': {'shortName': candidate, 'text': get_emoji_unicode(shortname) or candidate},
    }
