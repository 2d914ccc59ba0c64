# -*- coding: utf-8; tab-width: 4; indent-tabs-mode: nil; -*-
# Copyright (C) 2010 Kevin Mehall <km@kevinmehall.net>
# Copyright (C) 2012 Christopher Eby <kreed@kreed.org>
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

"""Flickr REST API

See https://www.flickr.com/services/api/ for API documentation.
"""

import logging
import os
import time
import urllib.request, urllib.parse, urllib.error
from socket import error as SocketError

from lxml import etree

from ..flickcoreconfig import (
    REST_URI,
    OAUTH_REQUEST_TOKEN_URI,
    OAUTH_AUTHORIZE_URI,
    OAUTH_ACCESS_TOKEN_URI,
    USER_AGENT,
    HTTP_TIMEOUT,
    REQUEST_DELAY,
)
from .errors import (
    ApiError,
    FlickrError,
    FlickrApiError,
    FlickrAuthTokenInvalid,
    FlickrNetError,
    FlickrTimeout,
    MissingCredential,
    DecodeError,
)
from .params import ParameterSet
from .request import Request
from .schema import build_records, eval_string
from .signing import LegacyCredentials, Signer
from . import schemas


def parse_response(text, method=None):
    """Parse a REST response and check its ``stat``

    Returns the lxml document of a successful response.
    """
    if isinstance(text, str):
        # lxml refuses str input that carries an encoding declaration
        text = text.encode('utf-8')
    try:
        tree = etree.fromstring(text)
    except etree.XMLSyntaxError as e:
        logging.error("Failed to parse XML: %s", e)
        raise FlickrError("Failed to parse XML", submsg=str(e))

    stat = tree.get('stat')
    if stat is None or stat == 'ok':
        return tree.getroottree()

    err = tree.find('err')
    code, msg = 0, ''
    if err is not None:
        try:
            code = int(err.get('code', '0'))
        except ValueError:
            logging.error("Bad fault code %r", err.get('code'))
        msg = err.get('msg', '')
    error_enum = ApiError.from_code(code)
    logging.error('fault code: {} {} message: {}'.format(code, error_enum.name, msg))

    if error_enum is ApiError.INVALID_AUTH_TOKEN:
        raise FlickrAuthTokenInvalid(code, msg, method)
    raise FlickrApiError(code, msg, method)

def parse_token_response(text):
    """``oauth_token=...&oauth_token_secret=...`` into a dict"""
    token = dict(urllib.parse.parse_qsl(text, keep_blank_values=True))
    if not token.get('oauth_token') or 'oauth_token_secret' not in token:
        logging.error("Token response without a token: %s", text)
        raise FlickrError("No OAuth token in response", submsg=str(token))
    return token


class Flickr:
    """Access the Flickr API

    Credentials are either the legacy ``api_key`` / ``secret`` /
    ``auth_token`` triple or an :py:class:`OAuthCredentials`; when both
    are given OAuth wins.

    Get information from Flickr using:

    - :py:meth:`call` to invoke any method and get the response document
    - :py:meth:`build_records` to decode a document with a schema
    - the call sites below, e.g. :py:meth:`photos_get_info`
    """
    def __init__(self, api_key=None, secret=None, auth_token=None, oauth=None,
                 service_uri=REST_URI, user_agent=USER_AGENT, proxy=None,
                 request_delay=REQUEST_DELAY, opener=None):
        self.legacy = LegacyCredentials(api_key, secret, auth_token)
        self.oauth = oauth
        self.service_uri = service_uri
        self.user_agent = user_agent
        self.request_delay = request_delay
        self.last_request_time = None
        self.opener = opener or self.build_opener(proxy)

    @property
    def credentials(self):
        return self.oauth if self.oauth is not None else self.legacy

    @staticmethod
    def build_opener(proxy=None):
        handlers = []
        if proxy:
            handlers.append(urllib.request.ProxyHandler({'http': proxy, 'https': proxy}))
        return urllib.request.build_opener(*handlers)

    def set_url_opener(self, opener):
        self.opener = opener

    def set_request_delay(self, delay_msec):
        if delay_msec >= 0:
            self.request_delay = delay_msec

    def prepare(self, method, params=None, need_auth=True, sign=False, write=False,
                base_uri=None, oauth_extra=None):
        """Build a signed :py:class:`Request`

        :param method: REST method name such as ``flickr.photos.getInfo``,
                       or ``None`` for the OAuth token endpoints
        :param need_auth: add the auth token and sign if one is set
        :param sign: sign even without a token
        :param write: send as POST
        """
        if not method and not base_uri:
            raise FlickrError("No method to prepare")
        base_uri = base_uri or self.service_uri
        http_method = 'POST' if write else 'GET'

        # read-only snapshot for the whole computation
        signer = Signer(self.credentials)
        p = ParameterSet(params)
        if method:
            p.add('method', method)

        signed = signer.needs_signature(need_auth, sign)
        if signer.is_oauth:
            signer.oauth_parameters(p, **(oauth_extra or {}))
        else:
            signer.legacy_parameters(p, need_auth)
        if signed:
            signer.sign(p, http_method, base_uri)

        request = Request(http_method, base_uri, p, api_method=method, signed=signed)
        logging.debug(request.uri)
        return request

    def _wait_for_slot(self):
        # at most one request per request_delay milliseconds
        now = time.monotonic()
        if self.last_request_time is not None:
            wait = self.last_request_time + self.request_delay / 1000.0 - now
            if wait > 0:
                logging.debug("Waiting %.3fs before next request", wait)
                time.sleep(wait)
                now = time.monotonic()
        self.last_request_time = now

    def fetch(self, request):
        """Send ``request`` and return the response body as text"""
        self._wait_for_slot()
        headers = {'User-agent': self.user_agent}
        if request.body is not None:
            headers['Content-type'] = 'application/x-www-form-urlencoded'
            logging.debug(request.body)

        try:
            req = urllib.request.Request(request.uri, request.body, headers, method=request.http_method)
            with self.opener.open(req, timeout=HTTP_TIMEOUT) as response:
                text = response.read().decode('utf-8')
        except urllib.error.HTTPError as e:
            logging.error("HTTP error: %s", e)
            raise FlickrNetError(str(e), e.code)
        except urllib.error.URLError as e:
            logging.error("Network error: %s", e)
            reason = getattr(e.reason, 'strerror', None) or str(e.reason)
            if reason == 'timed out':
                raise FlickrTimeout("Network error", submsg="Timeout")
            else:
                raise FlickrNetError("Network error", submsg=reason)
        except SocketError as e:
            try:
                error_string = os.strerror(e.errno)
            except (TypeError, ValueError):
                error_string = "Unknown Error"
            logging.error("Network Socket Error: %s", error_string)
            raise FlickrNetError("Network Socket Error", submsg=error_string)

        logging.debug(text)
        return text

    def invoke(self, request):
        return parse_response(self.fetch(request), request.api_method)

    def call(self, method, params=None, need_auth=True, sign=False, write=False):
        return self.invoke(self.prepare(method, params, need_auth, sign, write))

    def build_records(self, document, root_path, schema):
        records = build_records(document, root_path, schema)
        if records is None:
            raise FlickrError("Failed to decode {} records".format(schema.kind))
        return records

    def build_record(self, document, root_path, schema):
        records = self.build_records(document, root_path, schema)
        return records[0] if records else None

    def call_get_one_string_field(self, key, value, method, path):
        params = {key: value} if key and value else None
        doc = self.call(method, params)
        try:
            return eval_string(doc, path)
        except DecodeError as e:
            logging.error("%s", e)
            raise FlickrError(str(e))

    # OAuth 1.0a: request token, user authorization, access token

    def _oauth_credentials(self):
        if self.oauth is None:
            raise MissingCredential("No OAuth client credentials")
        return self.oauth

    def oauth_request_token(self, callback='oob'):
        self.oauth = self._oauth_credentials().with_token(None, None)
        request = self.prepare(None, base_uri=OAUTH_REQUEST_TOKEN_URI,
                               oauth_extra={'callback': callback})
        token = parse_token_response(self.fetch(request))
        if token.get('oauth_callback_confirmed') != 'true':
            raise FlickrError("Request token was not confirmed", submsg=str(token))
        self.oauth = self.oauth.with_token(token['oauth_token'], token['oauth_token_secret'])
        logging.info("Got OAuth request token")
        return token['oauth_token']

    def oauth_authorize_uri(self, perms='read'):
        c = self._oauth_credentials()
        if not c.token:
            raise MissingCredential("No OAuth request token")
        return OAUTH_AUTHORIZE_URI + '?' + urllib.parse.urlencode({'oauth_token': c.token, 'perms': perms})

    def oauth_access_token(self, verifier):
        self._oauth_credentials()
        request = self.prepare(None, base_uri=OAUTH_ACCESS_TOKEN_URI,
                               oauth_extra={'verifier': verifier})
        token = parse_token_response(self.fetch(request))
        self.oauth = self.oauth.with_token(token['oauth_token'], token['oauth_token_secret'])
        logging.info("Got OAuth access token for %s", token.get('username'))
        return token

    # call sites

    def test_echo(self, **params):
        doc = self.call('flickr.test.echo', params, need_auth=False)
        return {node.tag: node.text for node in doc.getroot()}

    def test_login(self):
        doc = self.call('flickr.test.login')
        return self.build_record(doc, '/rsp/user', schemas.PERSON)

    def photos_get_info(self, photo_id, secret=None):
        params = {'photo_id': photo_id}
        if secret:
            params['secret'] = secret
        doc = self.call('flickr.photos.getInfo', params)
        return self.build_record(doc, '/rsp/photo', schemas.PHOTO)

    def photos_search(self, **params):
        doc = self.call('flickr.photos.search', params)
        return self.build_records(doc, '/rsp/photos/photo', schemas.PHOTO)

    def people_get_info(self, user_id):
        doc = self.call('flickr.people.getInfo', {'user_id': user_id})
        return self.build_record(doc, '/rsp/person', schemas.PERSON)

    def tags_get_list_photo(self, photo_id):
        doc = self.call('flickr.tags.getListPhoto', {'photo_id': photo_id})
        return self.build_records(doc, '/rsp/photo/tags/tag', schemas.TAG)

    def groups_discuss_topics_get_info(self, topic_id):
        doc = self.call('flickr.groups.discuss.topics.getInfo', {'topic_id': topic_id})
        return self.build_record(doc, '/rsp/topic', schemas.TOPIC)

    def urls_lookup_user(self, url):
        return self.call_get_one_string_field('url', url, 'flickr.urls.lookupUser', '/rsp/user/@id')

    def __repr__(self):
        return '<{}.{} {!r}>'.format(
            __name__,
            __class__.__name__,
            self.credentials,
        )
