from functools import lru_cache

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.front_matter import front_matter_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from markdown_adf.utils.mdit_adf_panels import panels_plugin
from markdown_adf.utils.mdit_adf_tasks import empty_tasks_plugin


def create_markdown_parser(
    detect_alerts: bool = True, front_matter: bool = False, **options
) -> MarkdownIt:
    """Create a markdown-it parser configured for ADF conversion.

    Uses the GitHub Flavored Markdown (GFM) like preset (CommonMark, tables, strikethrough and
    linkify) with raw HTML disabled, plus GFM task list items (`- [ ]` and `- [x]`).

    Args:
        detect_alerts: if True, GitHub alert blockquotes are tagged with their ADF panel type
        front_matter: if True, a YAML front matter block at the start of the text is parsed as a
            single `front_matter` token instead of Markdown
        **options: markdown-it options overriding the defaults

    Returns:
        The parser.
    """
    md = MarkdownIt('gfm-like', {'html': False, 'linkify': True, 'typographer': False, **options})
    md.use(tasklists_plugin)
    md.use(empty_tasks_plugin)
    if detect_alerts:
        md.use(panels_plugin)
    if front_matter:
        md.use(front_matter_plugin)
    return md


@lru_cache(maxsize=None)
def get_markdown_parser(detect_alerts: bool = True, front_matter: bool = False) -> MarkdownIt:
    """Return the shared parser for a configuration; it is never modified after creation."""
    return create_markdown_parser(detect_alerts=detect_alerts, front_matter=front_matter)


def parse_markdown(text: str, detect_alerts: bool = True, front_matter: bool = False) -> list[Token]:
    """Parse Markdown text into a flat markdown-it token stream."""
    return get_markdown_parser(detect_alerts, front_matter).parse(text)
