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

"""Decoding tables for the record kinds the API returns

Paths are relative to the record element, e.g. ``/rsp/photo``.
"""

from ..flickcoreconfig import STATIC_PHOTO_URI
from .schema import Schema, ValueType, nested

IDENTIFIER = ValueType.IDENTIFIER
UNIXTIME = ValueType.UNIXTIME
BOOLEAN = ValueType.BOOLEAN
DATETIME = ValueType.DATETIME
FLOAT = ValueType.FLOAT
INTEGER = ValueType.INTEGER
STRING = ValueType.STRING
URI = ValueType.URI


TAG = Schema('tag', [
    ('./@id', 'id', IDENTIFIER),
    ('./@author', 'author', STRING),
    ('./@authorname', 'authorname', STRING),
    # <tag>cooked</tag> unless it is <tag clean="cooked"><raw>raw</raw></tag>
    ('./text()', 'cooked', STRING),
    ('./@clean', 'cooked', STRING),
    ('./@raw', 'raw', STRING),
    ('./raw', 'raw', STRING),
    ('./@machine_tag', 'machine_tag', BOOLEAN),
    ('./@count', 'count', INTEGER),
    # tags.getHotList
    ('./@score', 'count', INTEGER),
])

PLACE = Schema('place', [
    ('./@place_id', 'id', IDENTIFIER),
    ('./@name', 'name', STRING),
    ('./@place_url', 'place_url', STRING),
    ('./@place_type', 'place_type', STRING),
    ('./@woeid', 'woeid', STRING),
    ('./@latitude', 'latitude', FLOAT),
    ('./@longitude', 'longitude', FLOAT),
    ('./@accuracy', 'accuracy', INTEGER),
    ('./neighbourhood', 'neighbourhood', STRING),
    ('./neighbourhood/@place_id', 'neighbourhood_placeid', STRING),
    ('./neighbourhood/@woeid', 'neighbourhood_woeid', STRING),
    ('./locality', 'locality', STRING),
    ('./locality/@place_id', 'locality_placeid', STRING),
    ('./locality/@woeid', 'locality_woeid', STRING),
    ('./county', 'county', STRING),
    ('./county/@place_id', 'county_placeid', STRING),
    ('./county/@woeid', 'county_woeid', STRING),
    ('./region', 'region', STRING),
    ('./region/@place_id', 'region_placeid', STRING),
    ('./region/@woeid', 'region_woeid', STRING),
    ('./country', 'country', STRING),
    ('./country/@place_id', 'country_placeid', STRING),
    ('./country/@woeid', 'country_woeid', STRING),
])

PHOTO = Schema('photo', [
    ('./@id', 'id', IDENTIFIER),
    ('./urls/url[@type="photopage"]', 'uri', IDENTIFIER),
    ('./@dateuploaded', 'dateuploaded', UNIXTIME),
    ('./@farm', 'farm', INTEGER),
    ('./@isfavorite', 'isfavorite', BOOLEAN),
    ('./@license', 'license', INTEGER),
    ('./@originalformat', 'originalformat', STRING),
    ('./@rotation', 'rotation', INTEGER),
    ('./@server', 'server', INTEGER),
    ('./@media', 'media', STRING),
    ('./dates/@lastupdate', 'dates_lastupdate', UNIXTIME),
    ('./dates/@posted', 'dates_posted', UNIXTIME),
    ('./dates/@taken', 'dates_taken', DATETIME),
    ('./dates/@takengranularity', 'dates_takengranularity', INTEGER),
    ('./description', 'description', STRING),
    ('./editability/@canaddmeta', 'editability_canaddmeta', BOOLEAN),
    ('./editability/@cancomment', 'editability_cancomment', BOOLEAN),
    ('./geoperms/@iscontact', 'geoperms_iscontact', BOOLEAN),
    ('./geoperms/@isfamily', 'geoperms_isfamily', BOOLEAN),
    ('./geoperms/@isfriend', 'geoperms_isfriend', BOOLEAN),
    ('./geoperms/@ispublic', 'geoperms_ispublic', BOOLEAN),
    ('./location/@accuracy', 'location_accuracy', INTEGER),
    ('./location/@latitude', 'location_latitude', FLOAT),
    ('./location/@longitude', 'location_longitude', FLOAT),
    ('./location/neighbourhood', 'location_neighbourhood', STRING),
    ('./location/locality', 'location_locality', STRING),
    ('./location/county', 'location_county', STRING),
    ('./location/region', 'location_region', STRING),
    ('./location/country', 'location_country', STRING),
    ('./location/@place_id', 'location_placeid', STRING),
    ('./owner/@location', 'owner_location', STRING),
    ('./owner/@nsid', 'owner_nsid', STRING),
    ('./owner/@realname', 'owner_realname', STRING),
    ('./owner/@username', 'owner_username', STRING),
    # search results carry the owner as an attribute
    ('./@owner', 'owner_nsid', STRING),
    ('./title', 'title', STRING),
    # title can also appear as an attribute in a photo summary
    ('./@title', 'title', STRING),
    ('./visibility/@isfamily', 'visibility_isfamily', BOOLEAN),
    ('./visibility/@isfriend', 'visibility_isfriend', BOOLEAN),
    ('./visibility/@ispublic', 'visibility_ispublic', BOOLEAN),
    # these can also appear as attributes in a photo summary
    ('./@isfamily', 'visibility_isfamily', BOOLEAN),
    ('./@isfriend', 'visibility_isfriend', BOOLEAN),
    ('./@ispublic', 'visibility_ispublic', BOOLEAN),
    ('./@secret', 'secret', STRING),
    ('./@originalsecret', 'originalsecret', STRING),
    ('./comments', 'comments', INTEGER),
    ('./views', 'views', INTEGER),
    ('./@views', 'views', INTEGER),
    nested('./tags/tag', 'tags', TAG),
    nested('./location', 'place', PLACE),
])

PERSON = Schema('person', [
    ('./@nsid', 'id', IDENTIFIER),
    # test.login answers <user id="...">
    ('./@id', 'id', IDENTIFIER),
    ('./@isadmin', 'isadmin', BOOLEAN),
    ('./@ispro', 'ispro', BOOLEAN),
    ('./@iconserver', 'iconserver', INTEGER),
    ('./@iconfarm', 'iconfarm', INTEGER),
    ('./username', 'username', STRING),
    ('./realname', 'realname', STRING),
    ('./mbox_sha1sum', 'mbox_sha1sum', STRING),
    ('./location', 'location', STRING),
    ('./photosurl', 'photosurl', URI),
    ('./profileurl', 'profileurl', URI),
    ('./mobileurl', 'mobileurl', URI),
    ('./photos/firstdate', 'photos_firstdate', UNIXTIME),
    ('./photos/firstdatetaken', 'photos_firstdatetaken', DATETIME),
    ('./photos/count', 'photos_count', INTEGER),
    ('./photos/views', 'photos_views', INTEGER),
    # test.login and photos.getFavorites
    ('./@username', 'username', STRING),
    ('./@favedate', 'favedate', UNIXTIME),
])

TOPIC = Schema('topic', [
    ('./@topic_id', 'id', IDENTIFIER),
    ('./@id', 'id', IDENTIFIER),
    ('./@subject', 'subject', STRING),
    ('./@group_id', 'group_nsid', STRING),
    ('./@name', 'group_name', STRING),
    ('./@iconserver', 'group_iconserver', INTEGER),
    ('./@iconfarm', 'group_iconfarm', INTEGER),
    ('./message', 'message', STRING),
    ('./@author', 'author_nsid', STRING),
    ('./@authorname', 'author_name', STRING),
    ('./@role', 'author_role', STRING),
    ('./@author_iconserver', 'author_iconserver', INTEGER),
    ('./@author_iconfarm', 'author_iconfarm', INTEGER),
    ('./@can_edit', 'author_can_edit', BOOLEAN),
    ('./@can_delete', 'author_can_delete', BOOLEAN),
    ('./@count_replies', 'count_replies', INTEGER),
    ('./@is_sticky', 'is_sticky', BOOLEAN),
    ('./@is_locked', 'is_locked', BOOLEAN),
    ('./@datecreate', 'date_create', UNIXTIME),
    ('./@datelastpost', 'date_lastpost', UNIXTIME),
    ('./@lastedit', 'date_lastedit', UNIXTIME),
])


def photo_source_uri(photo, size=None):
    """Image URI of a decoded photo

    :param size: one of ``s``, ``m``, ``t``, ``b``; ``o`` for the original
                 upload; anything else gives the default size
    """
    values = {
        'farm': photo['farm'].string,
        'server': photo['server'].string,
        'id': photo.id,
        'secret': photo['secret'].string,
        'suffix': '',
        'format': 'jpg',
    }
    if size == 'o':
        values['secret'] = photo['originalsecret'].string
        values['suffix'] = '_o'
        values['format'] = photo['originalformat'].string or 'jpg'
    elif size in ('s', 'm', 't', 'b'):
        values['suffix'] = '_' + size
    return STATIC_PHOTO_URI.format(**values)
