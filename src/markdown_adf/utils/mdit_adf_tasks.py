import re

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.token import Token

TASK_LIST_ITEM_CLASS = 'task-list-item'
TASK_LIST_CLASS = 'contains-task-list'
CHECKED_CHECKBOX_ATTRIBUTE = 'checked="checked"'

_EMPTY_TASK_MARKERS = {
    '[ ]': '<input class="task-list-item-checkbox" disabled="disabled" type="checkbox">',
    '[x]': '<input class="task-list-item-checkbox" checked="checked" disabled="disabled" type="checkbox">',
    '[X]': '<input class="task-list-item-checkbox" checked="checked" disabled="disabled" type="checkbox">',
}
_MARKER_SEPARATOR_PATTERN = re.compile(r'^(\[[ xX]])[\t\n\v\f\r]')


def empty_tasks_plugin(md: MarkdownIt) -> None:
    """Prepare list items for `mdit_py_plugins.tasklists`.

    The tasklists plugin requires text after the checkbox and only recognizes the checkbox state when a
    space follows it. This rule marks items made of a lone checkbox (`- [ ]`) with the same shape the plugin
    produces: the `task-list-item` class on the item, `contains-task-list` on its list and an `html_inline`
    checkbox token replacing the marker. A tab or other whitespace after the checkbox is replaced by a space.

    Must be used after `tasklists_plugin` so the rule runs ahead of it.
    """

    def process_empty_tasks(state: StateCore) -> None:
        tokens = state.tokens

        for i in range(2, len(tokens)):
            token = tokens[i]
            if not is_list_item_text(tokens, i):
                continue

            if token.content.strip() not in _EMPTY_TASK_MARKERS:
                normalize_separator(token)
                continue

            checkbox = Token('html_inline', '', 0)
            checkbox.content = _EMPTY_TASK_MARKERS[token.content.strip()]
            token.children = [checkbox]
            token.content = ''

            tokens[i - 2].attrSet('class', TASK_LIST_ITEM_CLASS)
            parent_index = parent_token(tokens, i - 2)
            if parent_index >= 0:
                tokens[parent_index].attrSet('class', TASK_LIST_CLASS)

    def is_list_item_text(tokens: list[Token], index: int) -> bool:
        return (
            tokens[index].type == 'inline'
            and tokens[index - 1].type == 'paragraph_open'
            and tokens[index - 2].type == 'list_item_open'
        )

    def normalize_separator(token: Token) -> None:
        if not _MARKER_SEPARATOR_PATTERN.match(token.content):
            return
        token.content = _MARKER_SEPARATOR_PATTERN.sub(r'\1 ', token.content)
        if token.children and token.children[0].type == 'text':
            token.children[0].content = _MARKER_SEPARATOR_PATTERN.sub(r'\1 ', token.children[0].content)

    def parent_token(tokens: list[Token], index: int) -> int:
        target_level = tokens[index].level - 1
        for i in range(index - 1, -1, -1):
            if tokens[i].level == target_level:
                return i
        return -1

    md.core.ruler.after('inline', 'empty-tasklists', process_empty_tasks)
