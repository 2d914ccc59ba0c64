# -*- coding: utf-8; tab-width: 4; indent-tabs-mode: nil; -*-
### BEGIN LICENSE
# Copyright (C) 2010-2012 Kevin Mehall <km@kevinmehall.net>
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

__license__ = 'GPL-3'

VERSION = '0.9.0'

# where the REST methods live; the trailing ? means parameters follow directly
REST_URI = 'https://www.flickr.com/services/rest/?'

OAUTH_REQUEST_TOKEN_URI = 'https://www.flickr.com/services/oauth/request_token'
OAUTH_AUTHORIZE_URI = 'https://www.flickr.com/services/oauth/authorize'
OAUTH_ACCESS_TOKEN_URI = 'https://www.flickr.com/services/oauth/access_token'

STATIC_PHOTO_URI = 'https://farm{farm}.staticflickr.com/{server}/{id}_{secret}{suffix}.{format}'

USER_AGENT = 'flickcore/' + VERSION
HTTP_TIMEOUT = 30

# milliseconds between two requests, i.e. at most one request a second
REQUEST_DELAY = 1000

if __name__=='__main__':
    print(VERSION)
