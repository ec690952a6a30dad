import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from markdown_adf.constants import CONFIG_FILE_ENV_VAR, ENV_PREFIX
from markdown_adf.files import get_config_file
from markdown_adf.mentions import create_mention_formatter, create_mention_resolver
from markdown_adf.models import AdfToMarkdownOptions, BaseModel, MarkdownToAdfOptions
from markdown_adf.smart_links import create_smart_link_resolver


@dataclass
class SmartLinksConfig(BaseModel):
    """Configuration of the URLs converted to smart link cards."""

    inline_domains: list[str] = field(default_factory=list)
    """Hostnames (or parts of hostnames) whose links are converted to inline cards."""
    block_domains: list[str] = field(default_factory=list)
    """Hostnames (or parts of hostnames) whose links are converted to block cards."""
    fallback_to_atlassian_detection: bool = True
    """If True (default), Atlassian URLs matching none of the domains above are classified by their path: Jira
    issues and boards become inline cards, Confluence pages become block cards."""

    @property
    def is_customized(self) -> bool:
        return bool(self.inline_domains or self.block_domains) or not self.fallback_to_atlassian_detection


class ConverterSettings(BaseSettings):
    """The configuration of the converters and the markdown-adf CLI tool.

    Settings are read from the environment (`MARKDOWN_ADF_` prefix, `__` for nested fields) and from the YAML
    file named by `MARKDOWN_ADF_CONFIG_FILE`, or `~/.config/markdown-adf/config.yaml` when it exists. The library
    functions never read them, use `markdown_to_adf_options()` and `adf_to_markdown_options()` to pass them along.
    """

    enable_smart_links: bool = True
    """If True (default), links to Atlassian sites are converted to smart link cards."""
    smart_links: SmartLinksConfig = Field(default_factory=SmartLinksConfig)  # type: ignore[assignment]
    """Configuration of the smart link classification."""
    mention_format: Literal['simple', 'linked', 'display'] = 'simple'
    """How mentions are written when converting ADF to Markdown: `simple` (`@Name`), `linked`
    (`@[Name](account-id)`) or `display` (the stored display text)."""
    mention_users: dict[str, str] | None = None
    """A mapping of usernames to Atlassian account ids. When set, only the `@username` mentions found in the
    mapping are converted to mention nodes, the others are kept as text."""
    detect_alerts: bool = True
    """If True (default), GitHub alert blockquotes such as `> [!NOTE]` are converted to ADF panels."""
    skip_front_matter: bool = False
    """If True, a YAML front matter block at the start of a Markdown file is left out of the converted document."""
    strict: bool = False
    """If True, converting ADF to Markdown fails on nodes that can't be rendered instead of skipping them."""
    log_file: str | None = None
    """The filename of the log file to use. If you set an empty string logging to a file is disabled."""
    log_level: str = 'WARNING'
    """The log level to use. Use Python's `logging` names: `CRITICAL`, `FATAL`, `ERROR`, `WARN`, `WARNING`, `INFO`,
    `DEBUG` and `NOTSET`."""

    model_config = SettingsConfigDict(
        extra='ignore',
        validate_assignment=True,
        env_prefix=ENV_PREFIX,
        env_nested_delimiter='__',
    )

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        if config_file := os.getenv(CONFIG_FILE_ENV_VAR):
            conf_file = Path(config_file).resolve()
            if not conf_file.exists():
                raise FileNotFoundError(f'Configuration file not found: {conf_file}')
        else:
            conf_file = get_config_file()

        if conf_file.exists():
            return (
                init_settings,
                env_settings,
                dotenv_settings,
                YamlConfigSettingsSource(settings_cls, yaml_file=conf_file),
            )
        else:
            return (
                init_settings,
                env_settings,
                dotenv_settings,
            )

    def markdown_to_adf_options(self) -> MarkdownToAdfOptions:
        """Build the options of `markdown_to_adf` from the settings."""
        smart_link_resolver = None
        if self.smart_links.is_customized:
            smart_link_resolver = create_smart_link_resolver(
                inline_domains=self.smart_links.inline_domains,
                block_domains=self.smart_links.block_domains,
                fallback_to_atlassian_detection=self.smart_links.fallback_to_atlassian_detection,
            )

        mention_resolver = None
        if self.mention_users:
            mention_resolver = create_mention_resolver(self.mention_users)

        return MarkdownToAdfOptions(
            enable_smart_links=self.enable_smart_links,
            smart_link_resolver=smart_link_resolver,
            mention_resolver=mention_resolver,
            detect_alerts=self.detect_alerts,
            skip_front_matter=self.skip_front_matter,
        )

    def adf_to_markdown_options(self) -> AdfToMarkdownOptions:
        """Build the options of `adf_to_markdown` from the settings."""
        return AdfToMarkdownOptions(
            mention_formatter=create_mention_formatter(self.mention_format),
            strict=self.strict,
        )
