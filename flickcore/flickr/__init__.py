# -*- coding: utf-8; tab-width: 4; indent-tabs-mode: nil; -*-
### BEGIN LICENSE
# Copyright (C) 2010 Kevin Mehall <km@kevinmehall.net>
#This program is free software: you can redistribute it and/or modify it
#under the terms of the GNU General Public License version 3, as published
#by the Free Software Foundation.
#
#This program is distributed in the hope that it will be useful, but
#WITHOUT ANY WARRANTY; without even the implied warranties of
#MERCHANTABILITY, SATISFACTORY QUALITY, or FITNESS FOR A PARTICULAR
#PURPOSE.  See the GNU General Public License for more details.
#
#You should have received a copy of the GNU General Public License along
#with this program.  If not, see <http://www.gnu.org/licenses/>.
### END LICENSE

from .errors import (
    ApiError,
    FlickrError,
    FlickrApiError,
    FlickrAuthTokenInvalid,
    FlickrNetError,
    FlickrTimeout,
    MissingCredential,
    SigningFailure,
    DuplicateParameter,
    DecodeError,
    PathEvaluationError,
    UnexpectedNodeKind,
)
from .params import ParameterSet, percent_encode
from .signing import LegacyCredentials, OAuthCredentials, SignatureInput, Signer
from .request import Request, build_query
from .schema import (
    ValueType,
    Field,
    EMPTY_FIELD,
    SchemaEntry,
    Schema,
    Record,
    nested,
    decode_field,
    build_records,
    build_record,
)
from .flickr import Flickr, parse_response
