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

import logging
import os

from .flickr import Flickr
from .errors import FlickrError

class FakeFlickr(Flickr):
    """Offline session answering from captured responses

    Responses are looked up by REST method name in ``responses`` first,
    then in ``xml_dir`` as ``<method without "flickr.">.xml``, e.g.
    ``photos.getInfo.xml``. OAuth token endpoints are looked up by URI.
    """
    def __init__(self, responses=None, xml_dir=None, **kwargs):
        kwargs.setdefault('api_key', 'fake-key')
        kwargs.setdefault('secret', 'fake-secret')
        kwargs.setdefault('request_delay', 0)
        super(FakeFlickr, self).__init__(**kwargs)
        self.responses = dict(responses or {})
        self.xml_dir = xml_dir
        self.requests = []
        logging.info("Using test mode")

    def fetch(self, request):
        self._wait_for_slot()
        self.requests.append(request)
        key = request.api_method or request.base_uri
        if key in self.responses:
            return self.responses[key]
        if self.xml_dir and request.api_method:
            filename = os.path.join(self.xml_dir, request.api_method[len('flickr.'):] + '.xml')
            if os.access(filename, os.R_OK):
                logging.info("fake: Method %s running offline using result from %s", key, filename)
                with open(filename, encoding='utf-8') as f:
                    return f.read()
        logging.error("Invalid method %s" % key)
        raise FlickrError("Method {} cannot run offline - no XML result available".format(key))
