import logging
from datetime import datetime, timezone

from markdown_adf.constants import (
    ADF_DOC_TYPE,
    ADF_INLINE_NODES,
    ADF_VERSION,
    DEFAULT_EXPAND_TITLE,
    DEFAULT_PANEL_TYPE,
    LOGGER_NAME,
    TASK_STATE_DONE,
)
from markdown_adf.exceptions import InvalidADFError, UnsupportedNodeError
from markdown_adf.mentions import default_mention_formatter
from markdown_adf.models import AdfToMarkdownOptions
from markdown_adf.utils.adf_helpers import escape_table_cell

logger = logging.getLogger(LOGGER_NAME)

_LIST_INDENT = '  '
_HARD_BREAK = '  \n'
_TABLE_CELL_HARD_BREAK = '<br>'

# Adjacent lists of the same kind would merge into one list when parsed back, every other one uses the
# alternate marker.
_LIST_KINDS = {'bulletList': 'bullet', 'taskList': 'bullet', 'orderedList': 'ordered'}
_BULLET_MARKERS = ('-', '*')
_ORDERED_DELIMITERS = ('.', ')')


def adf_to_markdown(document: dict, options: AdfToMarkdownOptions | None = None) -> str:
    """Convert an ADF document to Markdown.

    Args:
        document: the ADF document
        options: the serialization options; the defaults are used when omitted

    Returns:
        The Markdown text, top-level blocks separated by a blank line.

    Raises:
        InvalidADFError: if the document is not a mapping with type `doc` and version 1.
        UnsupportedNodeError: if `options.strict` is set and the document holds a node that can't be
            rendered.
    """
    if not isinstance(document, dict) or document.get('type') != ADF_DOC_TYPE:
        raise InvalidADFError('Invalid ADF document: missing or invalid "doc" type')
    if document.get('version') != ADF_VERSION:
        raise InvalidADFError(
            f'Invalid ADF document: unsupported version {document.get("version")!r}',
            extra={'version': document.get('version')},
        )

    options = options or AdfToMarkdownOptions()

    return '\n\n'.join(convert_blocks(_children(document, options), options, 0))


def convert_blocks(nodes: list[dict], options: AdfToMarkdownOptions, depth: int = 0) -> list[str]:
    """Render sibling block nodes, leaving out the ones that are not rendered."""
    blocks = []
    previous_kind = None
    alternate = False

    for node in nodes:
        kind = _LIST_KINDS.get(node.get('type'))
        alternate = kind is not None and kind == previous_kind and not alternate
        previous_kind = kind

        markdown = convert_node(node, options, depth, alternate=alternate)
        if markdown is not None:
            blocks.append(markdown)

    return blocks


def convert_node(
    node: dict, options: AdfToMarkdownOptions, depth: int = 0, alternate: bool = False
) -> str | None:
    """Render one block node.

    Args:
        node: the ADF block node
        options: the serialization options
        depth: the list nesting depth, used to indent list items
        alternate: if True, a list uses the alternate marker (`*` bullets, `)` delimiters)

    Returns:
        The Markdown of the node, or None if the node type is not rendered.
    """
    if not isinstance(node, dict):
        return _unsupported(type(node).__name__, options)

    node_type = node.get('type')
    attrs = _attrs(node)

    if node_type == 'paragraph':
        return convert_inline_content(_children(node, options), options)

    elif node_type == 'heading':
        level = _heading_level(attrs.get('level'))
        return f'{"#" * level} {convert_inline_content(_children(node, options), options)}'

    elif node_type == 'codeBlock':
        language = attrs.get('language') or ''
        code = ''.join(str(child.get('text') or '') for child in _children(node, options))
        return f'```{language}\n{code}\n```'

    elif node_type == 'blockquote':
        return _convert_blockquote(node, options, depth)

    elif node_type == 'bulletList':
        indent = _LIST_INDENT * depth
        marker = _BULLET_MARKERS[alternate]
        return '\n'.join(
            f'{indent}{marker} {_convert_list_item_content(item, options, depth)}'
            for item in _children(node, options)
        )

    elif node_type == 'orderedList':
        indent = _LIST_INDENT * depth
        delimiter = _ORDERED_DELIMITERS[alternate]
        start = _list_order(attrs.get('order'))
        return '\n'.join(
            f'{indent}{start + index}{delimiter} {_convert_list_item_content(item, options, depth)}'
            for index, item in enumerate(_children(node, options))
        )

    elif node_type == 'taskList':
        return _convert_task_list(node, options, depth, _BULLET_MARKERS[alternate])

    elif node_type == 'table':
        return _convert_table(node, options)

    elif node_type == 'rule':
        return '---'

    elif node_type == 'mediaSingle':
        return _convert_media_single(node)

    elif node_type == 'blockCard':
        return _convert_card(node)

    elif node_type == 'panel':
        return _convert_panel(node, options)

    elif node_type == 'expand':
        return _convert_expand(node, options)

    return _unsupported(node_type, options)


def _unsupported(node_type: str | None, options: AdfToMarkdownOptions) -> None:
    if options.strict:
        raise UnsupportedNodeError(str(node_type))
    logger.debug(f'Skipping unsupported ADF node: {node_type}')
    return None


def _children(node: dict, options: AdfToMarkdownOptions) -> list[dict]:
    """Return the child nodes; children that are not objects are skipped as unsupported."""
    content = node.get('content')
    if not isinstance(content, list):
        return []

    children = []
    for child in content:
        if isinstance(child, dict):
            children.append(child)
        else:
            _unsupported(type(child).__name__, options)
    return children


def _attrs(node: dict) -> dict:
    attrs = node.get('attrs')
    return attrs if isinstance(attrs, dict) else {}


def _heading_level(value) -> int:
    try:
        level = int(value)
    except (TypeError, ValueError):
        return 1
    return min(max(level, 1), 6)


def _list_order(value) -> int:
    if value is None:
        return 1
    try:
        return int(value)
    except (TypeError, ValueError):
        return 1


def _convert_blockquote(node: dict, options: AdfToMarkdownOptions, depth: int) -> str:
    quoted = [
        '\n'.join(f'> {line}' for line in markdown.split('\n'))
        for markdown in convert_blocks(_children(node, options), options, depth + 1)
    ]
    return '\n>\n'.join(quoted)


def _convert_task_list(node: dict, options: AdfToMarkdownOptions, depth: int, marker: str) -> str:
    indent = _LIST_INDENT * depth
    lines = []
    for item in _children(node, options):
        state = _attrs(item).get('state')
        checkbox = '[x]' if state == TASK_STATE_DONE else '[ ]'
        lines.append(f'{indent}{marker} {checkbox} {_convert_list_item_content(item, options, depth)}')
    return '\n'.join(lines)


def _convert_list_item_content(item: dict, options: AdfToMarkdownOptions, depth: int) -> str:
    """Render the content of a list item or a task item.

    Paragraphs are rendered inline, nested lists one level deeper on their own lines. Jira puts the
    inline nodes of task items directly in the item, consecutive inline nodes are rendered together.
    """
    parts = []
    inline_run: list[dict] = []

    for child in _children(item, options):
        if child.get('type') in ADF_INLINE_NODES:
            inline_run.append(child)
            continue

        if inline_run:
            parts.append(convert_inline_content(inline_run, options))
            inline_run = []

        if child.get('type') == 'paragraph':
            parts.append(convert_inline_content(_children(child, options), options))
        elif child.get('type') in _LIST_KINDS:
            nested = convert_node(child, options, depth + 1)
            if nested:
                parts.append(f'\n{nested}')
        else:
            markdown = convert_node(child, options, depth)
            if markdown:
                parts.append(markdown)

    if inline_run:
        parts.append(convert_inline_content(inline_run, options))

    return '\n'.join(parts)


def _convert_table(node: dict, options: AdfToMarkdownOptions) -> str:
    rows = _children(node, options)
    if not rows:
        return ''

    lines = []
    has_header = False

    for row in rows:
        cells = _children(row, options)
        rendered_cells = [_convert_table_cell(cell, options) for cell in cells]
        lines.append(f'| {" | ".join(rendered_cells)} |')

        if not has_header and any(cell.get('type') == 'tableHeader' for cell in cells):
            has_header = True
            lines.append(f'| {" | ".join("---" for _ in cells)} |')

    if not has_header:
        first_row_cells = _children(rows[0], options)
        lines.insert(1, f'| {" | ".join("---" for _ in first_row_cells)} |')

    return '\n'.join(lines)


def _convert_table_cell(cell: dict, options: AdfToMarkdownOptions) -> str:
    """Render the inline content of a cell on a single line."""
    inline = [
        child
        for block in _children(cell, options)
        for child in (_children(block, options) if block.get('type') not in ADF_INLINE_NODES else [block])
    ]
    markdown = convert_inline_content(inline, options, hard_break=_TABLE_CELL_HARD_BREAK)
    return escape_table_cell(markdown.replace('\n', ' '))


def _convert_media_single(node: dict) -> str:
    content = node.get('content') or []
    if not content or not isinstance(content[0], dict) or content[0].get('type') != 'media':
        return ''

    attrs = _attrs(content[0])
    url = attrs.get('url') or ''
    if attrs.get('type') == 'external' and url:
        return f'![{attrs.get("alt") or ""}]({url})'
    return ''


def _convert_card(node: dict) -> str:
    url = _attrs(node).get('url') or ''
    return f'[{url}]({url})' if url else ''


def _convert_panel(node: dict, options: AdfToMarkdownOptions) -> str:
    panel_type = str(_attrs(node).get('panelType') or DEFAULT_PANEL_TYPE)
    body = '\n'.join(convert_blocks(_children(node, options), options, 0))
    body_lines = '\n'.join(f'> {line}' for line in body.split('\n'))
    return f'> **{panel_type.upper()}:**\n{body_lines}'


def _convert_expand(node: dict, options: AdfToMarkdownOptions) -> str:
    title = _attrs(node).get('title') or DEFAULT_EXPAND_TITLE
    body = '\n\n'.join(convert_blocks(_children(node, options), options, 0))
    return f'<details>\n<summary>{title}</summary>\n\n{body}\n</details>'


def convert_inline_content(
    nodes: list[dict], options: AdfToMarkdownOptions, hard_break: str = _HARD_BREAK
) -> str:
    """Render a sequence of inline nodes and concatenate the results."""
    return ''.join(convert_inline_node(node, options, hard_break) for node in nodes)


def convert_inline_node(node: dict, options: AdfToMarkdownOptions, hard_break: str = _HARD_BREAK) -> str:
    if not isinstance(node, dict):
        _unsupported(type(node).__name__, options)
        return ''

    node_type = node.get('type')
    attrs = _attrs(node)

    if node_type == 'text':
        return _convert_text(node)

    elif node_type == 'hardBreak':
        return hard_break

    elif node_type == 'mention':
        formatter = options.mention_formatter or default_mention_formatter
        return formatter(attrs.get('id') or '', attrs.get('text'))

    elif node_type == 'emoji':
        return attrs.get('text') or attrs.get('shortName') or ''

    elif node_type == 'inlineCard':
        return _convert_card(node)

    elif node_type == 'date':
        return _convert_date(attrs.get('timestamp'))

    elif node_type == 'status':
        return f'`{attrs.get("text") or "[no status]"}`'

    elif node_type == 'mediaSingle':
        return _convert_media_single(node)

    _unsupported(node_type, options)
    return ''


def _convert_date(timestamp_ms) -> str:
    if not timestamp_ms:
        return '[no date]'
    try:
        timestamp = datetime.fromtimestamp(int(timestamp_ms) / 1000, tz=timezone.utc)
    except (TypeError, ValueError, OSError, OverflowError):
        return '[invalid date]'
    return timestamp.strftime('%Y-%m-%d')


def _convert_text(node: dict) -> str:
    text = str(node.get('text') or '')
    marks = node.get('marks')
    if not isinstance(marks, list):
        return text
    for mark in reversed(marks):
        if isinstance(mark, dict):
            text = _apply_mark(text, mark)
    return text


def _apply_mark(text: str, mark: dict) -> str:
    mark_type = mark.get('type')
    attrs = _attrs(mark)

    if mark_type == 'strong':
        return f'**{text}**'
    if mark_type == 'em':
        return f'*{text}*'
    if mark_type == 'code':
        return f'`{text}`'
    if mark_type == 'strike':
        return f'~~{text}~~'
    if mark_type == 'underline':
        return f'<u>{text}</u>'
    if mark_type == 'subsup':
        tag = 'sub' if attrs.get('type') == 'sub' else 'sup'
        return f'<{tag}>{text}</{tag}>'
    if mark_type == 'link':
        href = attrs.get('href') or ''
        if title := attrs.get('title'):
            return f'[{text}]({href} "{title}")'
        return f'[{text}]({href})'
    return text
