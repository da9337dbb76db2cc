"""Load JSON written by `tcxdb.serialize.create.json.export_json` back
into the model.

Values are held to the same rules as when they are read from TCX:
timestamps are normalised to UTC and integers must fit the range of the
field they are bound to.
"""

import dataclasses
import json
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Union, get_args, get_origin, get_type_hints

from tcxdb.exceptions import (TcxInputError, MissingFieldError, FieldTypeError, InvalidEnumError,
                              MalformedTimestampError)
from tcxdb.model import TrainingCenterDatabase
from tcxdb.serialize.parse._base import UINT_MAX, describe_type, logger, to_datetime, to_uint
from tcxdb.serialize.parse.tcx import TCXParser

# The scalar type name ('uint8', 'datetime', etc) of each bound field, keyed
# by (dataclass, attribute name).
SCALAR_TYPES = {
    (cls, binding.attr): binding.type
    for cls, bindings in TCXParser.BINDINGS.items()
    for binding in bindings
    if isinstance(binding.type, str)
}


def from_json_value(_type: Any, value: Any, path: str, scalar: Optional[str] = None) -> Any:
    """Convert a decoded JSON value to an instance of `_type`, which may
    be a dataclass, an Enum, a datetime, a scalar or an Optional / List of
    any of these. `scalar` is the name of the field's scalar type, where
    it has one.
    """
    origin = get_origin(_type)
    if origin is Union:
        if value is None:
            return None
        inner = [t for t in get_args(_type) if t is not type(None)][0]
        return from_json_value(inner, value, path, scalar)
    if origin is list:
        if not isinstance(value, list):
            raise FieldTypeError(path, expected='list', value=repr(value))
        item_type = get_args(_type)[0]
        return [from_json_value(item_type, v, f'{path}[{i}]', scalar) for i, v in enumerate(value)]
    if dataclasses.is_dataclass(_type):
        if not isinstance(value, dict):
            raise FieldTypeError(path, expected='object', value=repr(value))
        return from_dict(_type, value, path)
    if issubclass(_type, Enum):
        try:
            return _type(value)
        except ValueError:
            raise InvalidEnumError(path, expected=describe_type(_type), value=str(value))
    if _type is datetime:
        if not isinstance(value, str):
            raise MalformedTimestampError(path, expected='ISO 8601 date and time', value=repr(value))
        return to_datetime(value, path, None)
    if _type is float and isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if _type is int and isinstance(value, int) and not isinstance(value, bool):
        if scalar in UINT_MAX:
            return to_uint(scalar, str(value), path, None)
        return value
    if _type is str and isinstance(value, str):
        return value
    raise FieldTypeError(path, expected=_type.__name__, value=repr(value))


def from_dict(cls: type, data: dict, path: str) -> Any:
    hints = get_type_hints(cls)
    kwargs = {}
    for _field in dataclasses.fields(cls):
        if _field.name in data:
            kwargs[_field.name] = from_json_value(hints[_field.name], data[_field.name], f'{path}.{_field.name}',
                                                  SCALAR_TYPES.get((cls, _field.name)))
        elif (_field.default is dataclasses.MISSING) and (_field.default_factory is dataclasses.MISSING):
            raise MissingFieldError(f'{path}.{_field.name}')
    return cls(**kwargs)


def read_json(fpath: str) -> TrainingCenterDatabase:
    logger.info(f'Loading JSON from "{fpath}".')
    try:
        with open(fpath, encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise TcxInputError(f'Could not read "{fpath}": {e}') from e
    except json.JSONDecodeError as e:
        raise TcxInputError(f'"{fpath}" is not valid JSON: {e}') from e
    return from_json_value(TrainingCenterDatabase, data, 'TrainingCenterDatabase')
