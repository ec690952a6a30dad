"""ADF document validation.

Validation runs in two phases:

1. a JSON Schema (draft 7) shape check: the root is a version 1 `doc`, every node is an object with
   a string `type` and only the `type`, `attrs`, `content`, `marks` and `text` fields, every mark is an
   object with a string `type` and optional `attrs`;
2. a semantic walk from the root that checks the node vocabulary of each context, the attributes
   required by each node type and the marks of text nodes.

The second phase only runs on documents passing the first one. Both phases report every violation
they find.
"""

import logging
import threading
from typing import Any

from jsonschema import Draft7Validator

from markdown_adf.constants import (
    ADF_BLOCK_NODES,
    ADF_DOC_TYPE,
    ADF_INLINE_NODES,
    ADF_MARK_TYPES,
    ADF_VERSION,
    INLINE_CONTAINER_TYPES,
    LOGGER_NAME,
    TASK_STATE_DONE,
    TASK_STATE_TODO,
)
from markdown_adf.exceptions import SchemaValidationError
from markdown_adf.models import ValidationResult

logger = logging.getLogger(LOGGER_NAME)

ADF_SCHEMA: dict[str, Any] = {
    '$schema': 'http://json-schema.org/draft-07/schema#',
    'definitions': {
        'mark': {
            'type': 'object',
            'properties': {
                'type': {'type': 'string'},
                'attrs': {'type': 'object'},
            },
            'required': ['type'],
            'additionalProperties': False,
        },
        'node': {
            'type': 'object',
            'properties': {
                'type': {'type': 'string'},
                'attrs': {'type': 'object'},
                'content': {'type': 'array', 'items': {'$ref': '#/definitions/node'}},
                'marks': {'type': 'array', 'items': {'$ref': '#/definitions/mark'}},
                'text': {'type': 'string'},
            },
            'required': ['type'],
            'additionalProperties': False,
        },
    },
    'type': 'object',
    'properties': {
        'version': {'const': ADF_VERSION},
        'type': {'const': ADF_DOC_TYPE},
        'content': {'type': 'array', 'items': {'$ref': '#/definitions/node'}},
    },
    'required': ['version', 'type', 'content'],
}

_schema_validator: Draft7Validator | None = None
_schema_validator_lock = threading.Lock()

_TASK_STATES = (TASK_STATE_TODO, TASK_STATE_DONE)


def _get_schema_validator() -> Draft7Validator:
    """Return the shared schema validator, compiling it on first use."""
    global _schema_validator

    if _schema_validator is None:
        with _schema_validator_lock:
            if _schema_validator is None:
                Draft7Validator.check_schema(ADF_SCHEMA)
                _schema_validator = Draft7Validator(ADF_SCHEMA)

    return _schema_validator


def validate_adf_document(document: Any) -> ValidationResult:
    """Validate an ADF document.

    Args:
        document: the value to validate; any value is accepted

    Returns:
        The validation result. `errors` holds one message per violation, prefixed with the path of
        the offending value.
    """
    shape_errors = [
        f'{error.json_path}: {error.message}'
        for error in sorted(
            _get_schema_validator().iter_errors(document), key=lambda error: error.json_path
        )
    ]
    if shape_errors:
        logger.debug(f'ADF document failed the shape check with {len(shape_errors)} error(s)')
        return ValidationResult(valid=False, errors=shape_errors)

    errors: list[str] = []
    for index, node in enumerate(document['content']):
        _validate_node(node, f'content[{index}]', errors, block_context=True)

    if errors:
        logger.debug(f'ADF document failed the semantic check with {len(errors)} error(s)')
    return ValidationResult(valid=not errors, errors=errors)


def assert_valid_adf(document: Any) -> None:
    """Validate an ADF document and raise if it is invalid.

    Raises:
        SchemaValidationError: carrying every validation error.
    """
    result = validate_adf_document(document)
    if not result.valid:
        raise SchemaValidationError('Invalid ADF document', result.errors)


def is_valid_block_node(node_type: str) -> bool:
    return node_type in ADF_BLOCK_NODES


def is_valid_inline_node(node_type: str) -> bool:
    return node_type in ADF_INLINE_NODES


def is_valid_mark(mark_type: str) -> bool:
    return mark_type in ADF_MARK_TYPES


def _validate_node(node: dict, path: str, errors: list[str], block_context: bool) -> None:
    node_type = node['type']
    attrs = node.get('attrs') or {}

    if block_context:
        known = is_valid_block_node(node_type) or is_valid_inline_node(node_type)
    else:
        known = is_valid_inline_node(node_type)
    if not known:
        errors.append(f'{path}: Unknown node type "{node_type}"')

    if node_type == 'text':
        for index, mark in enumerate(node.get('marks') or []):
            _validate_mark(mark, f'{path}.marks[{index}]', errors)
    else:
        if 'marks' in node:
            errors.append(f'{path}: marks are only allowed on text nodes')
        if 'text' in node:
            errors.append(f'{path}: text is only allowed on text nodes')

    if node_type == 'heading':
        level = attrs.get('level')
        if not isinstance(level, int) or isinstance(level, bool) or not 1 <= level <= 6:
            errors.append(
                f'{path}: Heading must have level attribute between 1 and 6, got {level!r}'
            )

    elif node_type == 'taskItem':
        if not attrs.get('localId'):
            errors.append(f'{path}: taskItem must have localId attribute')
        if attrs.get('state') not in _TASK_STATES:
            errors.append(f'{path}: taskItem must have state attribute (TODO or DONE)')

    elif node_type == 'mention':
        if not attrs.get('id'):
            errors.append(f'{path}: mention must have id attribute')

    elif node_type == 'emoji':
        if not attrs.get('shortName'):
            errors.append(f'{path}: emoji must have shortName attribute')

    elif node_type in ('inlineCard', 'blockCard'):
        if not attrs.get('url'):
            errors.append(f'{path}: {node_type} must have url attribute')

    children_block_context = node_type not in INLINE_CONTAINER_TYPES
    for index, child in enumerate(node.get('content') or []):
        _validate_node(child, f'{path}.content[{index}]', errors, children_block_context)


def _validate_mark(mark: dict, path: str, errors: list[str]) -> None:
    mark_type = mark['type']
    attrs = mark.get('attrs') or {}

    if not is_valid_mark(mark_type):
        errors.append(f'{path}: Unknown mark type "{mark_type}"')

    elif mark_type == 'link':
        if not attrs.get('href'):
            errors.append(f'{path}: link mark must have href attribute')

    elif mark_type == 'subsup':
        if attrs.get('type') not in ('sub', 'sup'):
            errors.append(f'{path}: subsup mark must have type attribute (sub or sup)')
