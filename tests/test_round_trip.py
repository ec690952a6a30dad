import pytest

from markdown_adf.converters.adf_to_markdown import adf_to_markdown
from markdown_adf.converters.markdown_to_adf import markdown_to_adf
from markdown_adf.models import MarkdownToAdfOptions
from markdown_adf.validators import validate_adf_document


def round_trip(markdown: str) -> str:
    return adf_to_markdown(markdown_to_adf(markdown, MarkdownToAdfOptions(enable_smart_links=False)))


def paragraph(value: str) -> dict:
    return {'type': 'paragraph', 'content': [{'type': 'text', 'text': value}]}


class TestRoundTrip:
    @pytest.mark.parametrize(
        'markdown',
        [
            'Plain text',
            '# Heading 1',
            '## Heading 2',
            '### Heading 3',
            '#### Heading 4',
            '##### Heading 5',
            '###### Heading 6',
            '**bold**',
            '*italic*',
            '`inline code`',
            '~~strikethrough~~',
            '---',
            '```python\nprint("hello")\n```',
            '- one\n- two\n- three',
            '1. one\n2. two\n3. three',
            '3. three\n4. four',
            '- [ ] Todo\n- [x] Done',
            '> quote',
            '[link](https://example.com)',
            '[issue](https://example.atlassian.net/browse/PROJ-1)',
            'line one  \nline two',
            'Ping @alice',
            '| A | B |\n| --- | --- |\n| 1 | 2 |',
        ],
    )
    def test_round_trip(self, markdown):
        assert round_trip(markdown) == markdown

    def test_document_round_trip(self):
        markdown = '\n\n'.join(
            [
                '# Release notes',
                'Some **bold** and *italic* text with `code`.',
                '- first\n- second',
                '* [x] shipped\n* [ ] documented',
                '- third\n- fourth',
                '```bash\nmake release\n```',
                '> Quoted',
                '---',
            ]
        )

        assert round_trip(markdown) == markdown

    def test_adjacent_lists_stay_separate(self):
        document = {
            'version': 1,
            'type': 'doc',
            'content': [
                {'type': 'bulletList', 'content': [{'type': 'listItem', 'content': [paragraph('first')]}]},
                {'type': 'bulletList', 'content': [{'type': 'listItem', 'content': [paragraph('second')]}]},
            ],
        }

        converted = markdown_to_adf(adf_to_markdown(document))

        assert [block['type'] for block in converted['content']] == ['bulletList', 'bulletList']

    def test_empty_task_item(self):
        document = {
            'version': 1,
            'type': 'doc',
            'content': [
                {
                    'type': 'taskList',
                    'attrs': {'localId': 'list'},
                    'content': [
                        {'type': 'taskItem', 'attrs': {'localId': 'a', 'state': 'TODO'}, 'content': []},
                        {
                            'type': 'taskItem',
                            'attrs': {'localId': 'b', 'state': 'DONE'},
                            'content': [paragraph('done')],
                        },
                    ],
                }
            ],
        }

        task_list = markdown_to_adf(adf_to_markdown(document))['content'][0]

        assert task_list['type'] == 'taskList'
        assert [item['attrs']['state'] for item in task_list['content']] == ['TODO', 'DONE']

    def test_converted_documents_are_valid(self):
        markdown = '\n\n'.join(
            [
                '# Title',
                'Text with **marks**, @alice, :rocket: and https://example.atlassian.net/browse/PROJ-1.',
                '> [!TIP]\n> A panel',
                '- [ ] task',
                '1. item\n    - nested',
                '```js\nlet x = 1;\n```',
                '![Diagram](https://example.com/d.png)',
                '---',
            ]
        )

        result = validate_adf_document(markdown_to_adf(markdown))

        assert result.valid, result.errors
        assert result.errors == []
