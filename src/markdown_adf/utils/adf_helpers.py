import copy
import re
import uuid

_HEADING_TAG_PATTERN = re.compile(r'h([1-6])')


def generate_local_id() -> str:
    """Generate a unique id for `localId` attributes of task lists and task items."""
    return str(uuid.uuid4())


def parse_heading_level(tag: str) -> int:
    """Parse the heading level from a markdown-it tag.

    Args:
        tag: the tag of a `heading_open` token, e.g. 'h2'

    Returns:
        The level between 1 and 6, or 1 if the tag holds none.
    """
    match = _HEADING_TAG_PATTERN.search(tag or '')
    if match:
        return int(match.group(1))
    return 1


def extract_code_language(info: str) -> str | None:
    """Extract the language of a fenced code block from its info string.

    Only the first whitespace-delimited word is used, e.g. 'python title="x.py"' gives 'python'.
    """
    words = (info or '').split()
    return words[0] if words else None


def create_text_node(text: str, marks: list[dict] | None = None) -> dict:
    """Create an ADF text node carrying a copy of the given marks."""
    node: dict = {'type': 'text', 'text': text}
    if marks:
        node['marks'] = copy.deepcopy(marks)
    return node


def create_paragraph_node(content: list[dict] | None = None) -> dict:
    """Create an ADF paragraph; a paragraph without content has no `content` key."""
    if content:
        return {'type': 'paragraph', 'content': content}
    return {'type': 'paragraph'}


def is_blank_inline_content(content: list[dict]) -> bool:
    return all(node.get('type') == 'text' and not node.get('text', '').strip() for node in content)


def escape_table_cell(text: str) -> str:
    """Escape the pipes of a rendered table cell so they don't split the row."""
    return re.sub(r'(?<!\\)\|', r'\\|', text)
