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

from .params import percent_encode

# the REST method name goes on the wire as is
VERBATIM_PARAMETERS = ('method',)


def build_query(pairs, verbatim=VERBATIM_PARAMETERS):
    url_arg_strings = []
    for name, value in pairs:
        if name not in verbatim:
            value = percent_encode(value)
        url_arg_strings.append('%s=%s'%(name, value))
    return '&'.join(url_arg_strings)

def join_query(base_uri, query):
    if not query:
        return base_uri.rstrip('?')
    if base_uri.endswith('?'):
        return base_uri + query
    return base_uri + '?' + query


class Request:
    """A signed request ready for the transport

    GET requests carry everything in :py:attr:`uri`; POST requests carry
    the parameters in :py:attr:`body`.
    """
    def __init__(self, http_method, base_uri, params, api_method=None, signed=False):
        self.http_method = http_method.upper()
        self.base_uri = base_uri
        self.api_method = api_method
        self.signed = signed
        # signed requests go out in the order the signature was computed over
        self.pairs = params.canonical() if signed else params.items()

    @property
    def query(self):
        return build_query(self.pairs)

    @property
    def uri(self):
        if self.http_method == 'GET':
            return join_query(self.base_uri, self.query)
        return self.base_uri.rstrip('?')

    @property
    def body(self):
        if self.http_method == 'GET':
            return None
        return self.query.encode('utf-8')

    def body_params(self):
        """Name/value pairs for a form or multipart sender"""
        return list(self.pairs)

    def expected_length(self):
        """Length of :py:attr:`uri` worked out from its parts"""
        base = self.base_uri
        if self.http_method != 'GET' or not self.pairs:
            return len(base.rstrip('?'))
        length = len(base) + (0 if base.endswith('?') else 1)
        for name, value in self.pairs:
            if name not in VERBATIM_PARAMETERS:
                value = percent_encode(value)
            length += len(name) + 1 + len(value)
        return length + len(self.pairs) - 1

    def __repr__(self):
        return '<{}.{} {} {}>'.format(
            __name__,
            __class__.__name__,
            self.http_method,
            self.api_method or self.base_uri,
        )
