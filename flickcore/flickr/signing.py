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

"""Request signing

Flickr accepts two schemes and exactly one is active per request:

- the legacy scheme, ``api_sig = md5_hex(secret + name1 + value1 + ...)``
  over the parameters sorted by name
- OAuth 1.0a with HMAC-SHA1 over the ``METHOD&URI&PARAMS`` base string

See https://www.flickr.com/services/api/auth.oauth.html
"""

import logging
import secrets
import time
from collections import namedtuple

from . import digest
from .errors import MissingCredential, SigningFailure
from .params import percent_encode

OAUTH_SIGNATURE_METHOD = 'HMAC-SHA1'
OAUTH_VERSION = '1.0'


class LegacyCredentials(namedtuple('LegacyCredentials', 'api_key secret auth_token')):
    __slots__ = ()

    def __new__(cls, api_key, secret=None, auth_token=None):
        return super().__new__(cls, api_key, secret, auth_token)

    def __repr__(self):
        # never print the secret
        return 'LegacyCredentials(api_key={!r})'.format(self.api_key)


class OAuthCredentials(namedtuple('OAuthCredentials', 'client_key client_secret token token_secret')):
    __slots__ = ()

    def __new__(cls, client_key, client_secret, token=None, token_secret=None):
        return super().__new__(cls, client_key, client_secret, token, token_secret)

    def with_token(self, token, token_secret):
        return self._replace(token=token, token_secret=token_secret)

    def __repr__(self):
        return 'OAuthCredentials(client_key={!r}, token={!r})'.format(self.client_key, self.token)


class SignatureInput(namedtuple('SignatureInput', 'http_method base_uri parameters')):
    """What an OAuth signature is computed over

    ``base_uri`` must not carry a query string.
    """
    __slots__ = ()

    def base_string(self):
        return '&'.join([
            self.http_method.upper(),
            percent_encode(self.base_uri),
            percent_encode(self.parameters.oauth_parameter_string()),
        ])


def legacy_signature(params, secret):
    return digest.md5_hex(params.legacy_signing_string(secret))

def oauth_signing_key(client_secret, token_secret=None):
    # the & is required even when there is no token secret yet
    return percent_encode(client_secret) + '&' + percent_encode(token_secret or '')

def oauth_signature(signature_input, client_secret, token_secret=None):
    """base64 HMAC-SHA1 signature, not yet percent-encoded"""
    key = oauth_signing_key(client_secret, token_secret)
    data = signature_input.base_string()
    logging.debug('OAuth base string: %s', data)
    return digest.b64encode(digest.hmac_sha1(key, data))

def make_nonce():
    return secrets.token_hex(16)


class Signer:
    """Signs a :py:class:`ParameterSet` with one credential snapshot

    :param credentials: :py:class:`LegacyCredentials` or :py:class:`OAuthCredentials`
    """
    def __init__(self, credentials):
        self.credentials = credentials

    @property
    def is_oauth(self):
        return isinstance(self.credentials, OAuthCredentials)

    def needs_signature(self, need_auth=True, sign=False):
        c = self.credentials
        if self.is_oauth:
            # oauth_* parameters are only accepted with a signature
            return True
        return bool((need_auth and c.auth_token) or sign)

    def legacy_parameters(self, params, need_auth=True):
        c = self.credentials
        if not c.api_key:
            raise MissingCredential('No API key')
        params.add('api_key', c.api_key)
        if need_auth and c.auth_token:
            params.add('auth_token', c.auth_token)

    def oauth_parameters(self, params, callback=None, verifier=None, nonce=None, timestamp=None):
        c = self.credentials
        if not c.client_key:
            raise MissingCredential('No OAuth client key')
        if callback is not None:
            params.add('oauth_callback', callback)
        params.add('oauth_consumer_key', c.client_key)
        params.add('oauth_nonce', nonce if nonce is not None else make_nonce())
        params.add('oauth_signature_method', OAUTH_SIGNATURE_METHOD)
        params.add('oauth_timestamp', timestamp if timestamp is not None else int(time.time()))
        params.add('oauth_version', OAUTH_VERSION)
        if c.token:
            params.add('oauth_token', c.token)
        if verifier is not None:
            params.add('oauth_verifier', verifier)

    def sign(self, params, http_method='GET', base_uri=None):
        """Add ``api_sig`` or ``oauth_signature`` to ``params``

        Raises :py:class:`MissingCredential` if the active scheme has no
        secret; the request must not be sent in that case.
        """
        c = self.credentials
        try:
            if self.is_oauth:
                if not c.client_secret:
                    raise MissingCredential('No OAuth client secret')
                if base_uri is None:
                    raise SigningFailure('OAuth signing needs the base URI')
                base_uri = base_uri.rstrip('?')
                signature = oauth_signature(SignatureInput(http_method, base_uri, params),
                                            c.client_secret, c.token_secret)
                params.add('oauth_signature', signature)
            else:
                if not c.secret:
                    raise MissingCredential('No shared secret')
                params.add('api_sig', legacy_signature(params, c.secret))
        except (UnicodeError, TypeError) as e:
            raise SigningFailure('Signing failed: {}'.format(e))
        return params
