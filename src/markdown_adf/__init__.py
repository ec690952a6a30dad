"""Bidirectional conversion between Markdown and Atlassian Document Format (ADF)."""

from markdown_adf.config import ConverterSettings
from markdown_adf.converters.adf_to_markdown import adf_to_markdown
from markdown_adf.converters.markdown_to_adf import markdown_to_adf
from markdown_adf.emojis import (
    get_all_emoji_shortnames,
    get_emoji_shortname,
    get_emoji_unicode,
    is_valid_emoji,
    replace_emoji_shortnames,
    replace_unicode_emojis,
)
from markdown_adf.exceptions import (
    ConversionError,
    InvalidADFError,
    InvalidMarkdownError,
    SchemaValidationError,
    UnsupportedNodeError,
)
from markdown_adf.mentions import (
    create_mention_formatter,
    create_mention_resolver,
    default_mention_formatter,
    default_mention_resolver,
    parse_mention,
)
from markdown_adf.models import (
    AdfToMarkdownOptions,
    MarkdownToAdfOptions,
    MentionInfo,
    SmartLinkType,
    TaskState,
    ValidationResult,
)
from markdown_adf.smart_links import (
    atlassian_block_resolver,
    atlassian_inline_resolver,
    create_smart_link_resolver,
    default_smart_link_resolver,
    detect_smart_link_type,
    extract_confluence_page_info,
    extract_jira_issue_key,
    is_atlassian_url,
    no_smart_links_resolver,
)
from markdown_adf.utils.adf_helpers import generate_local_id
from markdown_adf.validators import (
    assert_valid_adf,
    is_valid_block_node,
    is_valid_inline_node,
    is_valid_mark,
    validate_adf_document,
)

__all__ = [
    'AdfToMarkdownOptions',
    'ConversionError',
    'ConverterSettings',
    'InvalidADFError',
    'InvalidMarkdownError',
    'MarkdownToAdfOptions',
    'MentionInfo',
    'SchemaValidationError',
    'SmartLinkType',
    'TaskState',
    'UnsupportedNodeError',
    'ValidationResult',
    'adf_to_markdown',
    'assert_valid_adf',
    'atlassian_block_resolver',
    'atlassian_inline_resolver',
    'create_mention_formatter',
    'create_mention_resolver',
    'create_smart_link_resolver',
    'default_mention_formatter',
    'default_mention_resolver',
    'default_smart_link_resolver',
    'detect_smart_link_type',
    'extract_confluence_page_info',
    'extract_jira_issue_key',
    'generate_local_id',
    'get_all_emoji_shortnames',
    'get_emoji_shortname',
    'get_emoji_unicode',
    'is_atlassian_url',
    'is_valid_block_node',
    'is_valid_emoji',
    'is_valid_inline_node',
    'is_valid_mark',
    'markdown_to_adf',
    'no_smart_links_resolver',
    'parse_mention',
    'replace_emoji_shortnames',
    'replace_unicode_emojis',
    'validate_adf_document',
]
