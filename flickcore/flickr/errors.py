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

from enum import IntEnum


class ApiError(IntEnum):
    # 1-95 are method specific, see each method's documentation
    METHOD_SPECIFIC = 1
    SSL_REQUIRED = 95
    INVALID_SIGNATURE = 96
    MISSING_SIGNATURE = 97
    INVALID_AUTH_TOKEN = 98
    INSUFFICIENT_PERMISSIONS = 99
    INVALID_API_KEY = 100
    SERVICE_UNAVAILABLE = 105
    WRITE_OPERATION_FAILED = 106
    FORMAT_NOT_FOUND = 111
    METHOD_NOT_FOUND = 112
    INVALID_SOAP_ENVELOPE = 114
    INVALID_XML_RPC_CALL = 115
    BAD_URL_FOUND = 116
    # Catch all for undocumented error codes
    UNKNOWN_ERROR = 100000

    @classmethod
    def from_code(cls, code):
        if 0 < code < cls.SSL_REQUIRED:
            return cls.METHOD_SPECIFIC
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN_ERROR

    @property
    def title(self):
        # Turns INVALID_AUTH_TOKEN into Flickr Error: Invalid Auth Token
        return 'Flickr Error: {}'.format(self.name.replace('_', ' ').title())

    @property
    def sub_message(self):
        value = self.value
        if value == 96 or value == 97:
            return 'The request signature was rejected.\nCheck the shared secret.'
        elif value == 98:
            return 'The login details or auth token passed were invalid.'
        elif value == 99:
            return 'The authenticated user lacks the permission for this call.'
        elif value == 100:
            return 'The API key passed was not valid or has expired.'
        elif value == 105:
            return 'Flickr is temporarily unavailable.\nTry again later.'
        else:
            return None


class FlickrError(IOError):
    def __init__(self, message, status=None, submsg=None):
        super().__init__(message)
        self.status = status
        self.message = message
        self.submsg = submsg

class FlickrApiError(FlickrError):
    """The service answered with ``stat="fail"``"""
    def __init__(self, code, msg, method=None):
        self.code = code
        self.msg = msg
        self.method = method
        self.error = ApiError.from_code(code)
        if method:
            message = 'Method {} failed with error {} - {}'.format(method, code, msg)
        else:
            message = 'Call failed with error {} - {}'.format(code, msg)
        super().__init__(message, code, self.error.sub_message)

class FlickrAuthTokenInvalid(FlickrApiError): pass
class FlickrNetError(FlickrError): pass
class FlickrTimeout(FlickrNetError): pass

class MissingCredential(FlickrError): pass
class SigningFailure(FlickrError): pass


class DuplicateParameter(KeyError): pass


class DecodeError(ValueError):
    """Aborts one decode pass; the builder turns it into "no result"."""

class PathEvaluationError(DecodeError): pass
class UnexpectedNodeKind(DecodeError): pass
