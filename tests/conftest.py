import pytest
from lxml import etree


PHOTO_INFO_XML = '''<?xml version="1.0" encoding="utf-8" ?>
<rsp stat="ok">
<photo id="2733" secret="123456" server="12" farm="1" dateuploaded="1150755888" isfavorite="0" license="3" rotation="90" originalsecret="1bc09ce34a" originalformat="png" media="photo">
  <owner nsid="12037949754@N01" username="Bees" realname="Cal Henderson" location="Bedford, UK" />
  <title>orford_castle_taster</title>
  <description>hello!</description>
  <visibility ispublic="1" isfriend="0" isfamily="0" />
  <dates posted="1100897479" taken="2004-11-19 12:51:19" takengranularity="0" lastupdate="1093022469" />
  <editability cancomment="1" canaddmeta="1" />
  <comments>1</comments>
  <tags>
    <tag id="1234" author="12037949754@N01" raw="woo yay">wooyay</tag>
    <tag id="1235" author="12037949754@N01" raw="hoopla">hoopla</tag>
  </tags>
  <location latitude="47.6" longitude="-122.3" accuracy="16" place_id="kH8dLOubBZRvX_YZ" woeid="2490383">
    <locality place_id="kH8dLOubBZRvX_YZ" woeid="2490383">Seattle</locality>
    <region place_id="hVUWVhqbBZlZSrZU" woeid="2347606">Washington</region>
    <country place_id="4KO02SibApitvSBieQ" woeid="23424977">United States</country>
  </location>
  <urls>
    <url type="photopage">http://www.flickr.com/photos/bees/2733/</url>
  </urls>
</photo>
</rsp>
'''

PHOTOS_SEARCH_XML = '''<?xml version="1.0" encoding="utf-8" ?>
<rsp stat="ok">
<photos page="1" pages="1" perpage="100" total="3">
  <photo id="2636" owner="47058503995@N01" secret="a123456" server="2" farm="1" title="test_04" ispublic="1" isfriend="0" isfamily="0" />
  <photo id="2635" owner="47058503995@N01" secret="b123456" server="2" farm="1" title="test_03" ispublic="0" isfriend="1" isfamily="1" />
  <photo id="2633" owner="47058503995@N01" secret="c123456" server="2" farm="1" title="test_01" ispublic="1" isfriend="0" isfamily="0" />
</photos>
</rsp>
'''

PERSON_XML = '''<?xml version="1.0" encoding="utf-8" ?>
<rsp stat="ok">
<person nsid="12037949754@N01" isadmin="0" ispro="1" iconserver="122" iconfarm="1">
  <username>bees</username>
  <realname>Cal Henderson</realname>
  <mbox_sha1sum>eea6cd28e3d0003ab51b0058a684d94980b727ac</mbox_sha1sum>
  <location>San Francisco</location>
  <photosurl>http://www.flickr.com/photos/bees/</photosurl>
  <profileurl>http://www.flickr.com/people/bees/</profileurl>
  <photos>
    <firstdate>1071510391</firstdate>
    <firstdatetaken>1900-09-02 09:11:24</firstdatetaken>
    <count>449</count>
  </photos>
</person>
</rsp>
'''

FAIL_XML = '''<?xml version="1.0" encoding="utf-8" ?>
<rsp stat="fail">
  <err code="1" msg="Photo not found" />
</rsp>
'''

BAD_TOKEN_XML = '''<?xml version="1.0" encoding="utf-8" ?>
<rsp stat="fail">
  <err code="98" msg="Invalid auth token" />
</rsp>
'''


def parse(text):
    return etree.fromstring(text.encode('utf-8')).getroottree()


@pytest.fixture
def photo_doc():
    return parse(PHOTO_INFO_XML)

@pytest.fixture
def search_doc():
    return parse(PHOTOS_SEARCH_XML)

@pytest.fixture
def person_doc():
    return parse(PERSON_XML)
