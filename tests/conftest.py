import logging
import os

import pytest

from markdown_adf.constants import ENV_PREFIX, LOGGER_NAME
from markdown_adf.models import MarkdownToAdfOptions


# NOTE: Settings read the environment and the user configuration directory, isolate every test
#       from the machine running the suite.
@pytest.fixture(autouse=True)
def isolated_configuration(monkeypatch, tmp_path):
    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name)
    monkeypatch.setenv('XDG_CONFIG_HOME', str(tmp_path / 'xdg-config'))
    yield


@pytest.fixture(autouse=True)
def reset_package_logger():
    package_logger = logging.getLogger(LOGGER_NAME)
    handlers = list(package_logger.handlers)
    level = package_logger.level
    yield
    for handler in package_logger.handlers:
        if handler not in handlers:
            handler.close()
    package_logger.handlers = handlers
    package_logger.setLevel(level)


@pytest.fixture
def no_smart_links() -> MarkdownToAdfOptions:
    return MarkdownToAdfOptions(enable_smart_links=False)


@pytest.fixture
def work_item_markdown_description():
    """Comprehensive Markdown description for testing Markdown to ADF conversion.

    This fixture holds the same content as `work_item_adf_description`, in Markdown format.
    """
    return """# GitHub Flavored Markdown (GFM) All-in-One Test

## 1. Alerts (Admonitions)

> [!NOTE]
> **Note:** Highlights information that users should take into account, even when skimming.

> [!TIP]
> **Tip:** Optional information to help a user be more successful.

> [!IMPORTANT]
> **Important:** Crucial information necessary for users to succeed.

> [!WARNING]
> **Warning:** Critical content demanding immediate user attention due to potential risks.

> [!CAUTION]
> **Caution:** Negative potential consequences of an action.

---

## 2. Text Formatting

**Bold Text** *Italic Text* ***Bold and Italic*** ~~Strikethrough~~ **Bold and ~~Strikethrough~~** `Inline Code`

---

## 3. Lists

### Checkboxes (Task List)

- [x] Completed task
- [ ] Incomplete task
- [ ] [Links in tasks works too](https://github.com)

### Nested Lists

1. First item
    - Unordered sub-item
    - Another sub-item
2. Second item
    1. Ordered sub-item A
    2. Ordered sub-item B

---

## 4. Code Blocks

### Syntax Highlighting (JavaScript)

```javascript
const greet = (name) => {
  console.log(`Hello, ${name}!`);
}
greet("GitHub");
```

### Syntax Highlighting (diff)

```diff
- const userStatus = "offline";
+ const userStatus = "online";
! const userStatus = "away"; // (Orange/Warning in some renderers)
# This is a comment/metadata line
```

## 5. Table

| Left Align | Center Align | Right Align |
|------------|--------------|-------------|
| Item 1     | Value        | $100        |
| Item 2     | Value        | $50         |
| Item 3     | Value        | $10         |

# Atlassian Document Format Test

## 1. User Mentions

Assigned to @testuser for review.

## 2. Smart Links

See https://example.atlassian.net/browse/PROJ-123 and [the design page](https://example.atlassian.net/wiki/spaces/ENG/pages/98765/Design).

## 3. Emojis

:grinning: :rocket:

## 4. Images

![Architecture diagram](https://example.com/diagram.png)

---
"""


@pytest.fixture
def work_item_adf_description():
    """Comprehensive ADF description, shaped like the documents returned by the Jira REST API."""
    return {
        'type': 'doc',
        'version': 1,
        'content': [
            {
                'type': 'heading',
                'attrs': {'level': 1},
                'content': [{'type': 'text', 'text': 'Atlassian Document Format Test'}],
            },
            {
                'type': 'panel',
                'attrs': {'panelType': 'warning'},
                'content': [
                    {
                        'type': 'paragraph',
                        'content': [
                            {'type': 'text', 'text': 'Warning:', 'marks': [{'type': 'strong'}]},
                            {'type': 'text', 'text': ' Critical content.'},
                        ],
                    }
                ],
            },
            {
                'type': 'paragraph',
                'content': [
                    {'type': 'text', 'text': 'Bold Text', 'marks': [{'type': 'strong'}]},
                    {'type': 'text', 'text': ' '},
                    {'type': 'text', 'text': 'Italic Text', 'marks': [{'type': 'em'}]},
                    {'type': 'text', 'text': ' '},
                    {'type': 'text', 'text': 'Strikethrough', 'marks': [{'type': 'strike'}]},
                    {'type': 'text', 'text': ' '},
                    {'type': 'text', 'text': 'Inline Code', 'marks': [{'type': 'code'}]},
                    {'type': 'text', 'text': ' '},
                    {'type': 'text', 'text': 'Underlined', 'marks': [{'type': 'underline'}]},
                    {'type': 'text', 'text': ' H'},
                    {'type': 'text', 'text': '2', 'marks': [{'type': 'subsup', 'attrs': {'type': 'sub'}}]},
                    {'type': 'text', 'text': 'O'},
                ],
            },
            {
                'type': 'taskList',
                'attrs': {'localId': 'task-list-1'},
                'content': [
                    {
                        'type': 'taskItem',
                        'attrs': {'localId': 'task-1', 'state': 'DONE'},
                        'content': [{'type': 'text', 'text': 'Completed task'}],
                    },
                    {
                        'type': 'taskItem',
                        'attrs': {'localId': 'task-2', 'state': 'TODO'},
                        'content': [{'type': 'text', 'text': 'Incomplete task'}],
                    },
                ],
            },
            {
                'type': 'orderedList',
                'attrs': {'order': 1},
                'content': [
                    {
                        'type': 'listItem',
                        'content': [
                            {'type': 'paragraph', 'content': [{'type': 'text', 'text': 'First item'}]},
                            {
                                'type': 'bulletList',
                                'content': [
                                    {
                                        'type': 'listItem',
                                        'content': [
                                            {
                                                'type': 'paragraph',
                                                'content': [
                                                    {'type': 'text', 'text': 'Unordered sub-item'}
                                                ],
                                            }
                                        ],
                                    }
                                ],
                            },
                        ],
                    },
                    {
                        'type': 'listItem',
                        'content': [
                            {'type': 'paragraph', 'content': [{'type': 'text', 'text': 'Second item'}]}
                        ],
                    },
                ],
            },
            {
                'type': 'codeBlock',
                'attrs': {'language': 'javascript'},
                'content': [
                    {'type': 'text', 'text': 'const greet = (name) => {\n  console.log(name);\n}'}
                ],
            },
            {
                'type': 'table',
                'attrs': {'isNumberColumnEnabled': False, 'layout': 'default'},
                'content': [
                    {
                        'type': 'tableRow',
                        'content': [
                            {
                                'type': 'tableHeader',
                                'content': [
                                    {'type': 'paragraph', 'content': [{'type': 'text', 'text': 'Left Align'}]}
                                ],
                            },
                            {
                                'type': 'tableHeader',
                                'content': [
                                    {'type': 'paragraph', 'content': [{'type': 'text', 'text': 'Right Align'}]}
                                ],
                            },
                        ],
                    },
                    {
                        'type': 'tableRow',
                        'content': [
                            {
                                'type': 'tableCell',
                                'content': [
                                    {'type': 'paragraph', 'content': [{'type': 'text', 'text': 'Item 1'}]}
                                ],
                            },
                            {
                                'type': 'tableCell',
                                'content': [
                                    {'type': 'paragraph', 'content': [{'type': 'text', 'text': '$100'}]}
                                ],
                            },
                        ],
                    },
                ],
            },
            {
                'type': 'paragraph',
                'content': [
                    {
                        'type': 'mention',
                        'attrs': {
                            'id': '123456:abcd1234-1234-1234-1234-abcdef123456',
                            'text': '@Test User',
                            'accessLevel': '',
                        },
                    },
                    {'type': 'text', 'text': ' '},
                    {'type': 'date', 'attrs': {'timestamp': '1769601600000'}},
                    {'type': 'text', 'text': ' '},
                    {'type': 'status', 'attrs': {'text': 'IN PROGRESS', 'color': 'blue'}},
                    {'type': 'text', 'text': ' '},
                    {'type': 'emoji', 'attrs': {'shortName': ':grinning:', 'text': '\U0001F600'}},
                    {'type': 'text', 'text': ' '},
                    {'type': 'emoji', 'attrs': {'shortName': ':rocket:'}},
                ],
            },
            {
                'type': 'paragraph',
                'content': [
                    {'type': 'text', 'text': 'Tracked in '},
                    {
                        'type': 'inlineCard',
                        'attrs': {'url': 'https://example.atlassian.net/browse/PROJ-123'},
                    },
                ],
            },
            {
                'type': 'blockCard',
                'attrs': {'url': 'https://example.atlassian.net/wiki/spaces/ENG/pages/98765'},
            },
            {
                'type': 'mediaSingle',
                'attrs': {'layout': 'center'},
                'content': [
                    {
                        'type': 'media',
                        'attrs': {
                            'type': 'external',
                            'url': 'https://example.com/diagram.png',
                            'alt': 'Architecture diagram',
                        },
                    }
                ],
            },
            {
                'type': 'expand',
                'attrs': {'title': 'Release notes'},
                'content': [
                    {'type': 'paragraph', 'content': [{'type': 'text', 'text': 'Hidden details'}]}
                ],
            },
            {'type': 'rule'},
        ],
    }
