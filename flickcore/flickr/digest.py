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

"""Digest primitives used to sign requests

All functions are pure and work on byte strings; text arguments are
encoded as UTF-8 first. The legacy Flickr scheme needs MD5, OAuth 1.0a
needs HMAC-SHA1 (RFC 2104, 64 byte blocks, keys longer than a block are
hashed with SHA-1 first).
"""

import base64
import hashlib
import hmac

BLOCK_SIZE = 64


def _bytes(data):
    if isinstance(data, str):
        return data.encode('utf-8')
    return bytes(data)

def md5(data):
    return hashlib.md5(_bytes(data)).digest()

def md5_hex(data):
    """Lowercase hex MD5, the form the legacy ``api_sig`` takes"""
    return hashlib.md5(_bytes(data)).hexdigest()

def sha1(data):
    return hashlib.sha1(_bytes(data)).digest()

def hmac_sha1(key, data):
    key = _bytes(key)
    if len(key) > BLOCK_SIZE:
        key = sha1(key)
    return hmac.new(key, _bytes(data), hashlib.sha1).digest()

def b64encode(digest):
    """Standard alphabet base64, '+' and '/' still need escaping in URIs"""
    return base64.b64encode(digest).decode('ascii')
