from typing import Optional


class TcxdbError(Exception):
    """Base class for all tcxdb-related exceptions."""
    pass


class TcxInputError(TcxdbError):
    """The input file or stream could not be opened or read."""
    pass


class MalformedXMLError(TcxdbError):
    """The input is not well-formed XML."""

    def __init__(self, msg: str, line: Optional[int] = None, column: Optional[int] = None):
        self.line = line
        self.column = column
        if line is not None:
            msg = f'{msg} (line {line}, column {column})'
        super().__init__(msg)


class MappingError(TcxdbError):
    """Well-formed XML that cannot be mapped onto the TCX model."""

    reason = 'could not map element'

    def __init__(self, path: str, tag: Optional[str] = None, expected: Optional[str] = None,
                 value: Optional[str] = None, detail: Optional[str] = None):
        self.path = path
        self.tag = tag
        self.expected = expected
        self.value = value
        msg = f'{path}: {detail or self.reason}'
        if expected is not None:
            msg += f' (expected {expected}'
            if value is not None:
                msg += f', got {value!r}'
            msg += ')'
        super().__init__(msg)


class MissingFieldError(MappingError):
    reason = 'required field is missing'


class FieldTypeError(MappingError):
    reason = 'invalid value'


class InvalidEnumError(MappingError):
    reason = 'value is not a member of the enumeration'


class MalformedTimestampError(MappingError):
    reason = 'malformed timestamp'


class DocumentStructureError(MappingError):
    reason = 'unexpected document structure'


class ExportError(TcxdbError):
    """The model could not be written out."""
    pass


class ConfigError(TcxdbError):
    """A configuration file could not be read."""
    pass
