import re

LOGGER_NAME = 'markdown_adf'
"""Package logger name identifier."""

ADF_VERSION = 1
"""The only ADF document version produced and accepted."""

ADF_DOC_TYPE = 'doc'
"""The `type` discriminator of an ADF root node."""

ENV_PREFIX = 'MARKDOWN_ADF_'
"""Prefix of the environment variables read by the settings."""

CONFIG_FILE_ENV_VAR = 'MARKDOWN_ADF_CONFIG_FILE'
"""Environment variable pointing to a YAML configuration file."""

LOG_FILE_ENV_VAR = 'MARKDOWN_ADF_LOG_FILE'
"""Environment variable pointing to the log file used by the CLI."""

DEFAULT_CONFIG_FILE_NAME = 'config.yaml'
"""Name of the configuration file under the user configuration directory."""

JIRA_ISSUE_PATTERN = re.compile(r'https://[\w.-]+\.atlassian\.net/browse/[A-Z]+-\d+')
"""Jira issue URLs are rendered as inline cards."""

CONFLUENCE_PAGE_PATTERN = re.compile(r'https://[\w.-]+\.atlassian\.net/wiki/')
"""Confluence URLs are rendered as block cards."""

JIRA_BOARD_PATTERN = re.compile(r'https://[\w.-]+\.atlassian\.net/jira/')
"""Jira boards and projects are rendered as inline cards."""

JIRA_ISSUE_KEY_PATTERN = re.compile(r'/browse/([A-Z]+-\d+)')

ATLASSIAN_HOST_SUFFIXES = ('.atlassian.net', '.atlassian.com', '.jira.com')
"""Hostname suffixes recognised as Atlassian sites."""

MENTION_PATTERN = re.compile(r'@(\w+)')
MENTION_WITH_ID_PATTERN = re.compile(r'@\[([^\]]+)\]\(([^)]+)\)')
EMOJI_PATTERN = re.compile(r':([a-zA-Z0-9_+-]+):')

INLINE_SYNTAX_PATTERN = re.compile(r'(@\w+|:[a-zA-Z0-9_+-]+:)')
"""Mention and emoji candidates inside a literal text run, matched left to right."""

ALERT_MARKER_PATTERN = re.compile(r'^\[!(NOTE|TIP|IMPORTANT|WARNING|CAUTION)\]')
"""GitHub alert marker at the start of a blockquote."""

ALERT_TO_PANEL_TYPE = {
    'NOTE': 'info',
    'TIP': 'success',
    'IMPORTANT': 'note',
    'WARNING': 'warning',
    'CAUTION': 'error',
}
"""GitHub alert names mapped to ADF panel types."""

DEFAULT_PANEL_TYPE = 'info'
DEFAULT_EXPAND_TITLE = 'Details'
MEDIA_SINGLE_LAYOUT = 'center'

TASK_STATE_TODO = 'TODO'
TASK_STATE_DONE = 'DONE'

INLINE_CONTAINER_TYPES = frozenset({'paragraph', 'heading', 'tableHeader', 'tableCell'})
"""Node types whose children are inline content."""

ADF_BLOCK_NODES = frozenset(
    {
        'paragraph',
        'heading',
        'codeBlock',
        'blockquote',
        'bulletList',
        'orderedList',
        'listItem',
        'taskList',
        'taskItem',
        'table',
        'tableRow',
        'tableHeader',
        'tableCell',
        'mediaSingle',
        'media',
        'rule',
        'panel',
        'expand',
        'blockCard',
        # NOTE: accepted by the validator, never produced by the converters.
        'embedCard',
        'decisionList',
        'decisionItem',
        'layoutSection',
        'layoutColumn',
    }
)

ADF_INLINE_NODES = frozenset(
    {
        'text',
        'hardBreak',
        'mention',
        'emoji',
        'inlineCard',
        'date',
        'status',
        'placeholder',
        'inlineExtension',
    }
)

ADF_MARK_TYPES = frozenset(
    {
        'strong',
        'em',
        'code',
        'strike',
        'underline',
        'link',
        'subsup',
        'textColor',
        'backgroundColor',
        'annotation',
    }
)
