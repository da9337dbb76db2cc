"""Base classes for building parsers.

A parser maps an XML element tree onto dataclasses using a table of
`Binding` objects for each dataclass. Each Binding ties one dataclass
field to one XML tag (or attribute) and says how the tag's content is
to be converted.

Matching is on the exact, case-sensitive local name of the tag, so
namespace prefixes are tolerated. Tags and attributes that no Binding
refers to are ignored. A tag that *is* bound but cannot be converted is
always an error.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

import dateutil.parser as dp
import lxml.etree

from tcxdb.config import Config
from tcxdb.exceptions import (MalformedXMLError, MissingFieldError, FieldTypeError, InvalidEnumError,
                              MalformedTimestampError, DocumentStructureError)
from tcxdb.logger import get_logger

# Create a common logger for all parsers.
logger = get_logger('parse')

# Maximum values for the unsigned integer types.
UINT_MAX = {
    'uint8': 0xFF,
    'uint16': 0xFFFF,
    'uint32': 0xFFFFFFFF
}

INT_RE = re.compile(r'[+-]?[0-9]+')
FLOAT_RE = re.compile(r'[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?|[+-]?INF|NaN')
# A calendar date and a time of day, at least to the minute.
DATETIME_RE = re.compile(r'[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}')


@dataclass(frozen=True)
class Binding:
    """Describes how one field of a dataclass is read from XML.

    `type` is either the name of a scalar type ('string', 'float',
    'uint8', 'uint16', 'uint32' or 'datetime'), an Enum subclass, or a
    dataclass which has bindings of its own.
    """
    attr: str
    tag: str
    type: Union[str, type]
    required: bool = False
    repeated: bool = False
    attribute: bool = False


def local_name(name: str) -> str:
    """Strip any namespace from a tag or attribute name."""
    return lxml.etree.QName(name).localname


def children_by_tag(elem: lxml.etree._Element) -> Dict[str, List[lxml.etree._Element]]:
    """Group the child elements of `elem` by local name, preserving
    document order. Comments and processing instructions are skipped.
    """
    children = {}
    for child in elem:
        if not isinstance(child.tag, str):
            continue
        children.setdefault(local_name(child.tag), []).append(child)
    return children


def get_attribute(elem: lxml.etree._Element, name: str) -> Optional[str]:
    for key, value in elem.attrib.items():
        if local_name(key) == name:
            return value
    return None


def describe_type(_type: Union[str, type]) -> str:
    """A short description of an expected type, for error messages."""
    if isinstance(_type, str):
        return _type
    if issubclass(_type, Enum):
        return f'{_type.__name__} ({", ".join(repr(m.value) for m in _type)})'
    return f'{_type.__name__} element'


def to_string(text: str, path: str, tag: str) -> str:
    return text


def to_float(text: str, path: str, tag: str) -> float:
    text = text.strip()
    if not FLOAT_RE.fullmatch(text):
        raise FieldTypeError(path, tag, expected='float', value=text)
    return float(text)


def to_uint(type_name: str, text: str, path: str, tag: str) -> int:
    text = text.strip()
    if not INT_RE.fullmatch(text):
        raise FieldTypeError(path, tag, expected=type_name, value=text)
    value = int(text)
    if not 0 <= value <= UINT_MAX[type_name]:
        raise FieldTypeError(path, tag, expected=type_name, value=text,
                             detail=f'value out of range 0-{UINT_MAX[type_name]}')
    return value


def to_datetime(text: str, path: str, tag: str) -> datetime:
    """Parse an ISO 8601 timestamp, normalised to UTC. Timestamps with no
    UTC offset are taken to be in UTC. A date on its own is not a
    timestamp.
    """
    text = text.strip()
    if not DATETIME_RE.match(text):
        raise MalformedTimestampError(path, tag, expected='ISO 8601 date and time', value=text)
    try:
        dt = dp.isoparse(text)
    except (ValueError, OverflowError):
        raise MalformedTimestampError(path, tag, expected='ISO 8601 date and time', value=text)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_enum(enum_type: type, text: str, path: str, tag: str) -> Enum:
    """Decode an enumerated value. The text must match a member's value
    exactly; whitespace and case are significant.
    """
    try:
        return enum_type(text)
    except ValueError:
        raise InvalidEnumError(path, tag, expected=describe_type(enum_type), value=text)


SCALAR_CONVERTERS = {
    'string': to_string,
    'float': to_float,
    'datetime': to_datetime,
}


class BaseParser:
    """Maps a parsed XML document onto a tree of dataclasses.

    Subclasses provide ROOT_TAG, ROOT_TYPE and BINDINGS (a dict mapping
    each dataclass to a tuple of Binding objects).
    """

    ROOT_TAG: str = ''
    ROOT_TYPE: type = None
    BINDINGS: Dict[type, Tuple[Binding, ...]] = {}

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()

    def _xml_parser(self) -> lxml.etree.XMLParser:
        return lxml.etree.XMLParser(
            resolve_entities=False,
            no_network=True,
            remove_comments=True,
            remove_pis=True,
            huge_tree=self.config.huge_tree
        )

    def _load_root(self, data: bytes) -> lxml.etree._Element:
        if not data.strip():
            raise MalformedXMLError('Document is empty')
        try:
            return lxml.etree.fromstring(data, self._xml_parser())
        except lxml.etree.XMLSyntaxError as e:
            if 'excessive depth' in (e.msg or '').lower():
                # Well-formed so far, but nested beyond libxml2's limit.
                raise DocumentStructureError(self.ROOT_TAG,
                                             detail=f'document is nested too deeply ({e.msg})') from e
            line, column = e.position
            raise MalformedXMLError(e.msg, line, column) from e

    def parse(self, data: bytes) -> Any:
        """Parse the XML document `data` and return an instance of
        ROOT_TYPE.
        """
        root = self._load_root(data)
        root_tag = local_name(root.tag)
        if root_tag != self.ROOT_TAG:
            raise DocumentStructureError(root_tag, root_tag, expected=f'root element {self.ROOT_TAG}',
                                         value=root_tag)
        try:
            return self.map_element(root, self.ROOT_TYPE, self.ROOT_TAG)
        except RecursionError:
            raise DocumentStructureError(self.ROOT_TAG, detail='document is nested too deeply to be mapped')

    def map_element(self, elem: lxml.etree._Element, cls: type, path: str) -> Any:
        """Create an instance of `cls` from `elem`."""
        children = children_by_tag(elem)
        kwargs = {}
        for binding in self.BINDINGS[cls]:
            field_path = f'{path}/{binding.tag}'
            if binding.attribute:
                text = get_attribute(elem, binding.tag)
                if text is not None:
                    kwargs[binding.attr] = self.convert_text(text, binding, f'{path}/@{binding.tag}')
                elif binding.required:
                    raise MissingFieldError(f'{path}/@{binding.tag}', binding.tag,
                                            expected=describe_type(binding.type))
                continue

            found = children.get(binding.tag, [])
            if binding.repeated:
                kwargs[binding.attr] = [self.convert_element(e, binding, f'{field_path}[{i}]')
                                        for i, e in enumerate(found)]
            elif found:
                # If a single-valued tag is repeated, the first occurrence wins.
                kwargs[binding.attr] = self.convert_element(found[0], binding, field_path)
            elif binding.required:
                raise MissingFieldError(field_path, binding.tag, expected=describe_type(binding.type))
        return cls(**kwargs)

    def convert_element(self, elem: lxml.etree._Element, binding: Binding, path: str) -> Any:
        if binding.type in self.BINDINGS:
            return self.map_element(elem, binding.type, path)
        return self.convert_text(elem.text or '', binding, path)

    def convert_text(self, text: str, binding: Binding, path: str) -> Any:
        _type = binding.type
        if isinstance(_type, str):
            if _type in UINT_MAX:
                return to_uint(_type, text, path, binding.tag)
            return SCALAR_CONVERTERS[_type](text, path, binding.tag)
        if issubclass(_type, Enum):
            return to_enum(_type, text, path, binding.tag)
        raise TypeError(f'No binding table for {_type.__name__}.')
