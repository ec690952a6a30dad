import logging
from typing import NamedTuple

from markdown_it.token import Token
from markdown_it.tree import SyntaxTreeNode

from markdown_adf.constants import ADF_DOC_TYPE, ADF_VERSION, LOGGER_NAME
from markdown_adf.converters.inline import convert_inline_tokens
from markdown_adf.exceptions import InvalidMarkdownError
from markdown_adf.models import MarkdownToAdfOptions, TaskState
from markdown_adf.parser import parse_markdown
from markdown_adf.utils.adf_helpers import (
    create_paragraph_node,
    extract_code_language,
    generate_local_id,
    is_blank_inline_content,
    parse_heading_level,
)
from markdown_adf.utils.mdit_adf_tasks import CHECKED_CHECKBOX_ATTRIBUTE, TASK_LIST_ITEM_CLASS

logger = logging.getLogger(LOGGER_NAME)


class _ListItem(NamedTuple):
    content: list[dict]
    task_state: TaskState | None


def markdown_to_adf(text: str, options: MarkdownToAdfOptions | None = None) -> dict:
    """Convert Markdown text to an ADF document.

    Args:
        text: the Markdown text
        options: the conversion options; the defaults are used when omitted

    Returns:
        A new ADF document (`{'version': 1, 'type': 'doc', 'content': [...]}`).

    Raises:
        InvalidMarkdownError: if the text is not a string.
    """
    if not isinstance(text, str):
        raise InvalidMarkdownError(
            f'Markdown input must be a string, got {type(text).__name__}',
            extra={'input_type': type(text).__name__},
        )

    options = options or MarkdownToAdfOptions()

    if not text.strip():
        return {'version': ADF_VERSION, 'type': ADF_DOC_TYPE, 'content': []}

    tree = SyntaxTreeNode(
        parse_markdown(
            text,
            detect_alerts=options.detect_alerts,
            front_matter=options.skip_front_matter,
        )
    )
    return {
        'version': ADF_VERSION,
        'type': ADF_DOC_TYPE,
        'content': convert_blocks(tree.children, options),
    }


def convert_blocks(
    nodes: list[SyntaxTreeNode], options: MarkdownToAdfOptions, depth: int = 0
) -> list[dict]:
    """Convert sibling block nodes, in order, to ADF block nodes."""
    content: list[dict] = []
    for node in nodes:
        content.extend(convert_block(node, options, depth))
    return content


def convert_block(
    node: SyntaxTreeNode, options: MarkdownToAdfOptions, depth: int = 0
) -> list[dict]:
    """Convert one block node of the syntax tree.

    A single Markdown block can map to several ADF blocks (a paragraph holding images is split
    around them) or to none (unsupported blocks).

    Args:
        node: the syntax tree node spanning the block
        options: the conversion options
        depth: the nesting depth of the block

    Returns:
        List of ADF block nodes.
    """
    if node.type == 'paragraph':
        return _convert_paragraph(node, options)

    elif node.type == 'heading':
        content = convert_inline_tokens(_inline_tokens(node), options)
        heading: dict = {'type': 'heading', 'attrs': {'level': parse_heading_level(node.tag)}}
        if content:
            heading['content'] = content
        return [heading]

    elif node.type in ('fence', 'code_block'):
        return [_convert_code_block(node)]

    elif node.type == 'blockquote':
        content = convert_blocks(node.children, options, depth + 1)
        panel_type = (node.meta or {}).get('panel_type')
        if panel_type:
            return [{'type': 'panel', 'attrs': {'panelType': panel_type}, 'content': content}]
        return [{'type': 'blockquote', 'content': content}]

    elif node.type == 'bullet_list':
        return [_convert_bullet_list(node, options, depth)]

    elif node.type == 'ordered_list':
        ordered_list: dict = {'type': 'orderedList'}
        start = node.attrGet('start')
        if start is not None and int(start) != 1:
            ordered_list['attrs'] = {'order': int(start)}
        ordered_list['content'] = [
            {'type': 'listItem', 'content': content}
            for content, _ in _convert_list_items(node, options, depth, keep_checkboxes=True)
        ]
        return [ordered_list]

    elif node.type == 'table':
        return [_convert_table(node, options)]

    elif node.type == 'hr':
        return [{'type': 'rule'}]

    logger.debug(f'Skipping unsupported markdown block: {node.type}')
    return []


def _inline_tokens(node: SyntaxTreeNode) -> list:
    """Return the flat inline tokens of a paragraph, heading or table cell."""
    for child in node.children:
        if child.type == 'inline' and child.token is not None:
            return list(child.token.children or [])
    return []


def _convert_paragraph(node: SyntaxTreeNode, options: MarkdownToAdfOptions) -> list[dict]:
    return _convert_paragraph_tokens(_inline_tokens(node), options)


def _convert_paragraph_tokens(tokens: list[Token], options: MarkdownToAdfOptions) -> list[dict]:
    content = convert_inline_tokens(tokens, options)

    if not any(child['type'] == 'mediaSingle' for child in content):
        return [create_paragraph_node(content)]

    # Images are block nodes in ADF, the paragraph is split around them.
    blocks: list[dict] = []
    pending: list[dict] = []

    for child in content:
        if child['type'] == 'mediaSingle':
            if pending and not is_blank_inline_content(pending):
                blocks.append(create_paragraph_node(pending))
            pending = []
            blocks.append(child)
        else:
            pending.append(child)

    if pending and not is_blank_inline_content(pending):
        blocks.append(create_paragraph_node(pending))

    return blocks


def _convert_code_block(node: SyntaxTreeNode) -> dict:
    code = node.content
    if code.endswith('\n'):
        code = code[:-1]

    code_block: dict = {'type': 'codeBlock'}

    language = extract_code_language(node.info) if node.type == 'fence' else None
    if language:
        code_block['attrs'] = {'language': language}

    if code:
        code_block['content'] = [{'type': 'text', 'text': code}]

    return code_block


def _convert_bullet_list(node: SyntaxTreeNode, options: MarkdownToAdfOptions, depth: int) -> dict:
    items = _convert_list_items(node, options, depth)

    # A single checkbox item is enough to turn the whole list into a task list.
    if any(item.task_state is not None for item in items):
        return {
            'type': 'taskList',
            'attrs': {'localId': generate_local_id()},
            'content': [
                {
                    'type': 'taskItem',
                    'attrs': {
                        'localId': generate_local_id(),
                        'state': (item.task_state or TaskState.TODO).value,
                    },
                    'content': item.content,
                }
                for item in items
            ],
        }

    return {
        'type': 'bulletList',
        'content': [{'type': 'listItem', 'content': item.content} for item in items],
    }


def _convert_list_items(
    node: SyntaxTreeNode, options: MarkdownToAdfOptions, depth: int, keep_checkboxes: bool = False
) -> list[_ListItem]:
    items: list[_ListItem] = []
    for child in node.children:
        if child.type != 'list_item':
            logger.debug(f'Skipping unexpected list child: {child.type}')
            continue
        items.append(_convert_list_item(child, options, depth, keep_checkboxes))
    return items


def _convert_list_item(
    item: SyntaxTreeNode, options: MarkdownToAdfOptions, depth: int, keep_checkboxes: bool
) -> _ListItem:
    """Convert the blocks of a list item and read its task list checkbox.

    Task list items carry the `task-list-item` class and their first paragraph starts with an
    `html_inline` checkbox token. Ordered lists can't become task lists, with `keep_checkboxes` the
    checkbox is written back as literal text.
    """
    task_state = _task_state(item)
    if task_state is None:
        return _ListItem(convert_blocks(item.children, options, depth + 1), None)

    first, *rest = item.children
    tokens = _inline_tokens(first)[1:]
    if keep_checkboxes:
        marker = '[x] ' if task_state == TaskState.DONE else '[ ] '
        tokens = _prepend_text(marker, tokens)
        task_state = None
    else:
        tokens = _strip_leading_whitespace(tokens)

    content = [
        *_convert_paragraph_tokens(tokens, options),
        *convert_blocks(rest, options, depth + 1),
    ]
    return _ListItem(content, task_state)


def _task_state(item: SyntaxTreeNode) -> TaskState | None:
    if TASK_LIST_ITEM_CLASS not in str(item.attrGet('class') or '').split():
        return None
    if not item.children or item.children[0].type != 'paragraph':
        return None

    tokens = _inline_tokens(item.children[0])
    if not tokens or tokens[0].type != 'html_inline':
        return None

    if CHECKED_CHECKBOX_ATTRIBUTE in tokens[0].content:
        return TaskState.DONE
    return TaskState.TODO


def _strip_leading_whitespace(tokens: list[Token]) -> list[Token]:
    if not tokens or tokens[0].type != 'text':
        return tokens
    text = tokens[0].content.lstrip()
    if not text:
        return tokens[1:]
    return [tokens[0].copy(content=text), *tokens[1:]]


def _prepend_text(text: str, tokens: list[Token]) -> list[Token]:
    if tokens and tokens[0].type == 'text':
        return [tokens[0].copy(content=text + tokens[0].content.lstrip()), *tokens[1:]]

    token = Token('text', '', 0)
    token.content = text if tokens else text.rstrip()
    return [token, *tokens]


def _convert_table(node: SyntaxTreeNode, options: MarkdownToAdfOptions) -> dict:
    rows: list[dict] = []

    for section in node.children:
        for row in section.children:
            if row.type != 'tr':
                continue
            is_header_row = section.type == 'thead' or any(
                cell.type == 'th' for cell in row.children
            )
            cell_type = 'tableHeader' if is_header_row else 'tableCell'
            rows.append(
                {
                    'type': 'tableRow',
                    'content': [
                        {
                            'type': cell_type,
                            'content': [
                                create_paragraph_node(
                                    convert_inline_tokens(_inline_tokens(cell), options)
                                )
                            ],
                        }
                        for cell in row.children
                    ],
                }
            )

    return {'type': 'table', 'content': rows}
