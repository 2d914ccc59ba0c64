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

from collections import OrderedDict
from urllib.parse import quote

from .errors import DuplicateParameter


def percent_encode(s):
    """RFC 3986 encoding: only A-Za-z0-9 and -._~ pass through"""
    return quote(s, safe='~')

def format_value(v):
    if v is None:
        return ''
    elif v is True:
        return '1'
    elif v is False:
        return '0'
    elif isinstance(v, (list, tuple)):
        return ','.join(format_value(i) for i in v)
    else:
        return str(v)

def _canonical_key(item):
    name, value = item
    return (name.encode('utf-8'), value.encode('utf-8'))


class ParameterSet:
    """Request parameters, rebuilt for every call

    Insertion order is kept for unsigned requests; signing always works
    on :py:meth:`canonical`.
    """
    def __init__(self, params=None):
        self._params = OrderedDict()
        if params:
            for name, value in params.items():
                self.add(name, value)

    def add(self, name, value):
        if name in self._params:
            raise DuplicateParameter(name)
        self._params[name] = format_value(value)

    def canonical(self):
        return sorted(self._params.items(), key=_canonical_key)

    def legacy_signing_string(self, secret):
        return secret + ''.join(name + value for name, value in self.canonical())

    def oauth_parameter_string(self):
        return '&'.join('{}={}'.format(percent_encode(name), percent_encode(value))
                        for name, value in self.canonical())

    def items(self):
        return list(self._params.items())

    def copy(self):
        other = ParameterSet()
        other._params = OrderedDict(self._params)
        return other

    def __contains__(self, name):
        return name in self._params

    def __getitem__(self, name):
        return self._params[name]

    def __iter__(self):
        return iter(self._params)

    def __len__(self):
        return len(self._params)

    def __repr__(self):
        return '<{}.{} {}>'.format(
            __name__,
            __class__.__name__,
            ', '.join(self._params),
        )
