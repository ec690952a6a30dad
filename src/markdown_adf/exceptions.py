from typing import Any


class ConversionError(Exception):
    """General conversion exception, whenever a specific reason can't be determined."""

    code: str = 'CONVERSION_ERROR'
    extra: dict[str, Any] = {}

    def __init__(self, *args, **kwargs):
        self.extra = kwargs.pop('extra', self.extra)
        super().__init__(*args)


class InvalidMarkdownError(ConversionError):
    code = 'INVALID_MARKDOWN'


class InvalidADFError(ConversionError):
    """The root of an ADF document is missing or has the wrong discriminators."""

    code = 'INVALID_ADF'


class SchemaValidationError(ConversionError):
    """Raised by `assert_valid_adf` with every violation found in the document."""

    code = 'SCHEMA_VALIDATION_ERROR'

    def __init__(self, message: str, validation_errors: list[str]):
        self.validation_errors = list(validation_errors)
        super().__init__(message, extra={'validation_errors': self.validation_errors})

    def __str__(self) -> str:
        message = super().__str__()
        if not self.validation_errors:
            return message
        return f'{message}: {self.validation_errors[0]}'


class UnsupportedNodeError(ConversionError):
    code = 'UNSUPPORTED_NODE'

    def __init__(self, node_type: str):
        self.node_type = node_type
        super().__init__(f'Unsupported node type: {node_type}', extra={'node_type': node_type})
