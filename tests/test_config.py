import dataclasses

from pydantic import ValidationError
import pytest

from markdown_adf.config import ConverterSettings, SmartLinksConfig
from markdown_adf.constants import CONFIG_FILE_ENV_VAR
from markdown_adf.mentions import default_mention_formatter
from markdown_adf.models import AdfToMarkdownOptions, MarkdownToAdfOptions, MentionInfo, SmartLinkType

YAML_CONFIGURATION = """
enable_smart_links: true
smart_links:
  inline_domains:
    - github.com
  block_domains:
    - docs.example.com
mention_users:
  alice: acc-1
mention_format: linked
detect_alerts: false
strict: true
log_level: info
"""


class TestConverterSettings:
    def test_defaults(self):
        settings = ConverterSettings()

        assert settings.enable_smart_links is True
        assert settings.smart_links == SmartLinksConfig()
        assert settings.mention_format == 'simple'
        assert settings.mention_users is None
        assert settings.detect_alerts is True
        assert settings.skip_front_matter is False
        assert settings.strict is False
        assert settings.log_file is None
        assert settings.log_level == 'WARNING'

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv('MARKDOWN_ADF_ENABLE_SMART_LINKS', 'false')
        monkeypatch.setenv('MARKDOWN_ADF_STRICT', 'true')
        monkeypatch.setenv('MARKDOWN_ADF_LOG_LEVEL', 'debug')

        settings = ConverterSettings()

        assert settings.enable_smart_links is False
        assert settings.strict is True
        assert settings.log_level == 'DEBUG'

    def test_config_file_from_environment(self, monkeypatch, tmp_path):
        config_file = tmp_path / 'markdown-adf.yaml'
        config_file.write_text(YAML_CONFIGURATION)
        monkeypatch.setenv(CONFIG_FILE_ENV_VAR, str(config_file))

        settings = ConverterSettings()

        assert settings.smart_links.inline_domains == ['github.com']
        assert settings.smart_links.block_domains == ['docs.example.com']
        assert settings.mention_users == {'alice': 'acc-1'}
        assert settings.mention_format == 'linked'
        assert settings.detect_alerts is False
        assert settings.strict is True
        assert settings.log_level == 'INFO'

    def test_default_config_file(self, tmp_path):
        config_directory = tmp_path / 'xdg-config' / 'markdown-adf'
        config_directory.mkdir(parents=True)
        (config_directory / 'config.yaml').write_text('detect_alerts: false\n')

        assert ConverterSettings().detect_alerts is False

    def test_environment_takes_precedence_over_config_file(self, monkeypatch, tmp_path):
        config_file = tmp_path / 'markdown-adf.yaml'
        config_file.write_text(YAML_CONFIGURATION)
        monkeypatch.setenv(CONFIG_FILE_ENV_VAR, str(config_file))
        monkeypatch.setenv('MARKDOWN_ADF_STRICT', 'false')

        assert ConverterSettings().strict is False

    def test_missing_config_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv(CONFIG_FILE_ENV_VAR, str(tmp_path / 'missing.yaml'))

        with pytest.raises(FileNotFoundError):
            ConverterSettings()

    def test_invalid_mention_format(self, monkeypatch):
        monkeypatch.setenv('MARKDOWN_ADF_MENTION_FORMAT', 'fancy')

        with pytest.raises(ValidationError):
            ConverterSettings()


class TestConversionOptions:
    def test_default_options(self):
        settings = ConverterSettings()

        markdown_options = settings.markdown_to_adf_options()
        assert markdown_options.enable_smart_links is True
        assert markdown_options.smart_link_resolver is None
        assert markdown_options.mention_resolver is None
        assert markdown_options.detect_alerts is True

        adf_options = settings.adf_to_markdown_options()
        assert adf_options.mention_formatter is default_mention_formatter
        assert adf_options.strict is False

    def test_options_from_config_file(self, monkeypatch, tmp_path):
        config_file = tmp_path / 'markdown-adf.yaml'
        config_file.write_text(YAML_CONFIGURATION)
        monkeypatch.setenv(CONFIG_FILE_ENV_VAR, str(config_file))

        settings = ConverterSettings()
        markdown_options = settings.markdown_to_adf_options()
        adf_options = settings.adf_to_markdown_options()

        assert markdown_options.smart_link_resolver('https://github.com/org/repo') == SmartLinkType.INLINE
        assert markdown_options.smart_link_resolver('https://docs.example.com/a') == SmartLinkType.BLOCK
        assert markdown_options.mention_resolver('alice') == MentionInfo(id='acc-1', text='@alice')
        assert markdown_options.mention_resolver('bob') is None
        assert markdown_options.detect_alerts is False

        assert adf_options.mention_formatter('acc-1', '@Alice') == '@[Alice](acc-1)'
        assert adf_options.strict is True

    def test_smart_link_fallback_can_be_disabled(self):
        settings = ConverterSettings(smart_links={'fallback_to_atlassian_detection': False})

        resolver = settings.markdown_to_adf_options().smart_link_resolver

        assert resolver('https://example.atlassian.net/browse/PROJ-1') == SmartLinkType.LINK

    def test_options_as_dict(self):
        settings = ConverterSettings(mention_format='linked', strict=True)

        assert settings.markdown_to_adf_options().as_dict() == {
            'enable_smart_links': True,
            'smart_link_resolver': None,
            'mention_resolver': None,
            'detect_alerts': True,
            'skip_front_matter': False,
        }
        adf_options = settings.adf_to_markdown_options().as_dict()
        assert adf_options['strict'] is True
        assert isinstance(adf_options['mention_formatter'], str)

    @pytest.mark.parametrize(
        'options, field_name',
        [
            (MarkdownToAdfOptions(), 'enable_smart_links'),
            (AdfToMarkdownOptions(), 'strict'),
            (MentionInfo(id='acc-1'), 'id'),
        ],
    )
    def test_options_are_immutable(self, options, field_name):
        with pytest.raises(dataclasses.FrozenInstanceError):
            setattr(options, field_name, None)

    def test_options_can_be_replaced(self):
        options = dataclasses.replace(MarkdownToAdfOptions(), enable_smart_links=False)

        assert options.enable_smart_links is False
        assert options.as_dict()['enable_smart_links'] is False
