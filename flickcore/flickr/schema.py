# -*- coding: utf-8; tab-width: 4; indent-tabs-mode: nil; -*-
# Copyright (C) 2010-2012 Kevin Mehall <km@kevinmehall.net>
# This program is free software: you can redistribute it and/or modify it
# under the terms of the GNU General Public License version 3, as published
# by the Free Software Foundation.
#
# This program is distributed in the hope that it will be useful, but
# WITHOUT ANY WARRANTY; without even the implied warranties of
# MERCHANTABILITY, SATISFACTORY QUALITY, or FITNESS FOR A PARTICULAR
# PURPOSE.  See the GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along
# with this program.  If not, see <http://www.gnu.org/licenses/>.

"""Schema driven decoding of Flickr XML responses

A :py:class:`Schema` is an ordered table of ``(path, field, type)``
entries. :py:func:`build_records` evaluates a root XPath expression,
and for every matched element runs the table with the element as the
context node, producing one :py:class:`Record` per element.

Entries run in table order and a later match overwrites an earlier one,
so a table can list ``./title`` and then ``./@title`` to prefer the
attribute when both exist.
"""

import calendar
import email.utils
import logging
import re
from collections import OrderedDict, namedtuple
from datetime import datetime, timezone
from enum import IntEnum

from lxml import etree

from .errors import DecodeError, PathEvaluationError, UnexpectedNodeKind

ISO_DATE_FORMAT = '%Y-%m-%dT%H:%M:%SZ'

# tried in order before falling back to RFC 2822 dates
DATE_FORMATS = (
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m-%dT%H:%M:%SZ',
    '%Y-%m-%dT%H:%M:%S',
    '%Y-%m-%d %H:%M',
    '%Y-%m-%d',
)

ATOI_REGEX = re.compile(r'\s*([+-]?\d+)')


class ValueType(IntEnum):
    NONE = 0
    IDENTIFIER = 1
    UNIXTIME = 3
    BOOLEAN = 4
    DATETIME = 5
    FLOAT = 6
    INTEGER = 7
    STRING = 8
    URI = 9
    NESTED = 10

    @property
    def label(self):
        return _value_type_labels[self]

_value_type_labels = {
    ValueType.NONE: '(none)',
    ValueType.IDENTIFIER: 'identifier',
    ValueType.UNIXTIME: 'unix time',
    ValueType.BOOLEAN: 'boolean',
    ValueType.DATETIME: 'dateTime',
    ValueType.FLOAT: 'float',
    ValueType.INTEGER: 'integer',
    ValueType.STRING: 'string',
    ValueType.URI: 'uri',
    ValueType.NESTED: 'nested list',
}


class Field(namedtuple('Field', 'string integer type')):
    """One decoded value

    ``string`` is the text as stored (ISO-8601 for dates), ``integer`` the
    parsed number for integer, boolean and date types.
    """
    __slots__ = ()

    @property
    def value(self):
        t = self.type
        if t is ValueType.NONE:
            return None
        elif t is ValueType.INTEGER:
            return self.integer
        elif t is ValueType.BOOLEAN:
            return bool(self.integer)
        elif t is ValueType.FLOAT:
            try:
                return float(self.string)
            except ValueError:
                return None
        elif t is ValueType.DATETIME:
            return datetime.fromtimestamp(self.integer, timezone.utc)
        else:
            return self.string

EMPTY_FIELD = Field(None, None, ValueType.NONE)


class SchemaEntry(namedtuple('SchemaEntry', 'path field type schema')):
    __slots__ = ()

    def __new__(cls, path, field, type, schema=None):
        if (type is ValueType.NESTED) != (schema is not None):
            raise ValueError('Only nested entries carry a sub-schema: {}'.format(path))
        return super().__new__(cls, path, field, type, schema)

def nested(path, field, schema):
    return SchemaEntry(path, field, ValueType.NESTED, schema)


class Schema:
    """Decoding table for one kind of record, e.g. ``photo``

    :param kind: name of the record kind, used in logs and reprs
    :param entries: iterable of :py:class:`SchemaEntry` or ``(path, field, type)`` tuples
    """
    def __init__(self, kind, entries):
        self.kind = kind
        self.entries = tuple(e if isinstance(e, SchemaEntry) else SchemaEntry(*e) for e in entries)
        self.fields = self._names(ValueType.IDENTIFIER, ValueType.NESTED, exclude=True)
        self.identifiers = self._names(ValueType.IDENTIFIER)
        self.children = self._names(ValueType.NESTED)

    def _names(self, *types, exclude=False):
        names = []
        for entry in self.entries:
            if (entry.type in types) != exclude and entry.field not in names:
                names.append(entry.field)
        return tuple(names)

    def field_type(self, field):
        """The declared type of the last entry writing ``field``"""
        for entry in reversed(self.entries):
            if entry.field == field:
                return entry.type
        raise KeyError(field)

    def field_label(self, field):
        return '{} ({})'.format(field, self.field_type(field).label)

    def __repr__(self):
        return '<{}.{} {} ({} entries)>'.format(
            __name__,
            __class__.__name__,
            self.kind,
            len(self.entries),
        )


class Record:
    """Decoded fields of one element

    Every field the schema declares is present; unmatched ones hold
    :py:data:`EMPTY_FIELD`. Identifier entries land in :py:attr:`ids`
    (``record.id``, ``record.uri``) and nested lists in :py:attr:`children`.
    """
    def __init__(self, schema):
        self.kind = schema.kind
        self.ids = OrderedDict((name, None) for name in schema.identifiers)
        self.fields = OrderedDict((name, EMPTY_FIELD) for name in schema.fields)
        self.children = OrderedDict((name, []) for name in schema.children)

    @property
    def id(self):
        return self.ids.get('id')

    @property
    def uri(self):
        return self.ids.get('uri')

    def __getitem__(self, field):
        return self.fields[field]

    def __contains__(self, field):
        return self.fields.get(field, EMPTY_FIELD) is not EMPTY_FIELD

    def get(self, field, default=None):
        f = self.fields.get(field, EMPTY_FIELD)
        if f.type is ValueType.NONE:
            return default
        return f.value

    def as_dict(self):
        d = OrderedDict(self.ids)
        for name, f in self.fields.items():
            d[name] = f.value
        for name, records in self.children.items():
            d[name] = [r.as_dict() for r in records]
        return d

    def __repr__(self):
        return '<{}.{} {} {}>'.format(
            __name__,
            __class__.__name__,
            self.kind,
            self.id,
        )


def atoi(s):
    m = ATOI_REGEX.match(s)
    return int(m.group(1)) if m else 0

def unixtime_to_isotime(unix_time):
    return datetime.fromtimestamp(unix_time, timezone.utc).strftime(ISO_DATE_FORMAT)

def parse_date(s):
    """Free-form date to unix time, naive dates are taken as UTC"""
    s = s.strip()
    for fmt in DATE_FORMATS:
        try:
            dt = datetime.strptime(s, fmt)
        except ValueError:
            continue
        return calendar.timegm(dt.timetuple())
    try:
        dt = email.utils.parsedate_to_datetime(s)
    except (TypeError, ValueError, IndexError):
        return None
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp())

def _date_field(raw, unix_time):
    if unix_time is not None and unix_time >= 0:
        try:
            return Field(unixtime_to_isotime(unix_time), unix_time, ValueType.DATETIME)
        except (OverflowError, OSError, ValueError):
            pass
    # failed to convert, keep it as a string
    return Field(raw, None, ValueType.STRING)

def coerce(raw, value_type):
    if value_type is ValueType.UNIXTIME:
        try:
            unix_time = int(raw.strip())
        except ValueError:
            unix_time = None
        return _date_field(raw, unix_time)
    elif value_type is ValueType.DATETIME:
        return _date_field(raw, parse_date(raw))
    elif value_type in (ValueType.INTEGER, ValueType.BOOLEAN):
        return Field(raw, atoi(raw), value_type)
    elif value_type in (ValueType.STRING, ValueType.FLOAT, ValueType.URI):
        return Field(raw, None, value_type)
    elif value_type is ValueType.IDENTIFIER:
        return Field(raw, None, ValueType.NONE)
    raise AssertionError('Unexpected value type {!r}'.format(value_type))


def _node_kind(node):
    if isinstance(node, etree._Element):
        if node.tag is etree.Comment:
            return 'comment'
        elif node.tag is etree.ProcessingInstruction:
            return 'processing instruction'
        elif node.tag is etree.Entity:
            return 'entity'
        return 'element'
    elif isinstance(node, str):
        if getattr(node, 'is_attribute', False):
            return 'attribute'
        elif getattr(node, 'is_text', False) or getattr(node, 'is_tail', False):
            return 'text'
        return 'string'
    return type(node).__name__

def _evaluate(context, path):
    try:
        return context.xpath(path)
    except etree.XPathError as e:
        raise PathEvaluationError('Unable to evaluate XPath expression "{}": {}'.format(path, e))

def _node_text(path, result):
    if isinstance(result, bool):
        return '1' if result else '0'
    elif isinstance(result, float):
        return str(int(result)) if result.is_integer() else repr(result)
    elif not isinstance(result, list):
        # string() and friends
        return result or None
    if not result:
        return None
    node = result[0]
    kind = _node_kind(node)
    if kind == 'element':
        return node.text
    elif kind in ('attribute', 'text', 'string'):
        return str(node)
    raise UnexpectedNodeKind('Got unexpected node type {} for "{}"'.format(kind, path))


def eval_string(context, path):
    """Text of the first node ``path`` selects, or ``None``"""
    return _node_text(path, _evaluate(context, path))


def decode_field(node, entry):
    """Evaluate one schema entry against ``node``

    Returns a :py:class:`Field`, or ``None`` when the path matched
    nothing. Nested entries return their record list instead.
    Raises :py:class:`DecodeError` subclasses on structural problems.
    """
    if entry.type is ValueType.NESTED:
        return _build_records(node, entry.path, entry.schema)
    raw = eval_string(node, entry.path)
    if raw is None:
        return None
    return coerce(raw, entry.type)


def _build_record(node, schema):
    record = Record(schema)
    for entry in schema.entries:
        result = decode_field(node, entry)
        if entry.type is ValueType.NESTED:
            record.children[entry.field] = result
        elif result is None:
            continue
        elif entry.type is ValueType.IDENTIFIER:
            record.ids[entry.field] = result.string
        else:
            record.fields[entry.field] = result
    return record

def _build_records(context, root_path, schema):
    nodes = _evaluate(context, root_path)
    if not isinstance(nodes, list):
        raise UnexpectedNodeKind('"{}" did not select a node-set'.format(root_path))
    records = []
    for node in nodes:
        kind = _node_kind(node)
        if kind != 'element':
            raise UnexpectedNodeKind('Got unexpected node type {} for "{}"'.format(kind, root_path))
        records.append(_build_record(node, schema))
    return records


def build_records(document, root_path, schema):
    """Decode every element ``root_path`` selects into a :py:class:`Record`

    :param document: lxml element or element tree
    :param root_path: XPath expression selecting the record elements
    :param schema: the :py:class:`Schema` to apply to each element
    :returns: list of records in document order, possibly empty, or
              ``None`` if the pass was abandoned
    """
    try:
        return _build_records(document, root_path, schema)
    except DecodeError as e:
        logging.error('Decoding %s records failed: %s', schema.kind, e)
        return None

def build_record(document, root_path, schema):
    """First record :py:func:`build_records` finds, or ``None``"""
    records = build_records(document, root_path, schema)
    if records:
        return records[0]
    return None
