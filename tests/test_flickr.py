import io
import urllib.error

import pytest

from flickcore.flickcoreconfig import OAUTH_REQUEST_TOKEN_URI, OAUTH_ACCESS_TOKEN_URI, USER_AGENT
from flickcore.flickr import (
    ApiError,
    Flickr,
    FlickrError,
    FlickrApiError,
    FlickrAuthTokenInvalid,
    FlickrNetError,
    FlickrTimeout,
    MissingCredential,
    OAuthCredentials,
    parse_response,
    schemas,
)
from flickcore.flickr import flickr as flickr_module
from flickcore.flickr.digest import md5_hex
from flickcore.flickr.fake import FakeFlickr

from .conftest import PHOTO_INFO_XML, PHOTOS_SEARCH_XML, PERSON_XML, FAIL_XML, BAD_TOKEN_XML

ECHO_XML = '<?xml version="1.0" encoding="utf-8" ?><rsp stat="ok"><method>flickr.test.echo</method><foo>bar</foo></rsp>'
LOOKUP_XML = '<rsp stat="ok"><user id="12037949754@N01"><username>bees</username></user></rsp>'
LOGIN_XML = '<rsp stat="ok"><user id="12037949754@N01"><username>bees</username></user></rsp>'


class FakeOpener:
    def __init__(self, body=b'', error=None):
        self.body = body
        self.error = error
        self.requests = []

    def open(self, req, timeout=None):
        self.requests.append((req, timeout))
        if self.error is not None:
            raise self.error
        return io.BytesIO(self.body)


class FakeClock:
    def __init__(self):
        self.now = 100.0
        self.sleeps = []

    def monotonic(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


def test_photos_get_info_unsigned():
    f = FakeFlickr({'flickr.photos.getInfo': PHOTO_INFO_XML})
    photo = f.photos_get_info('2733')
    assert photo.id == '2733'
    request, = f.requests
    assert request.api_method == 'flickr.photos.getInfo'
    assert not request.signed
    assert request.uri.endswith('?photo_id=2733&method=flickr.photos.getInfo&api_key=fake-key')


def test_signed_with_auth_token():
    f = FakeFlickr({'flickr.photos.getInfo': PHOTO_INFO_XML}, auth_token='TOK')
    f.photos_get_info('2733', secret='abc')
    request, = f.requests
    assert request.signed
    expected = md5_hex('fake-secretapi_keyfake-keyauth_tokenTOKmethodflickr.photos.getInfophoto_id2733secretabc')
    assert request.uri.endswith(
        '?api_key=fake-key&api_sig={}&auth_token=TOK&method=flickr.photos.getInfo&photo_id=2733&secret=abc'.format(expected))


def test_sign_without_token():
    f = FakeFlickr({'flickr.test.echo': ECHO_XML})
    f.call('flickr.test.echo', need_auth=False, sign=True)
    assert 'api_sig=' in f.requests[0].uri


def test_write_is_post():
    f = FakeFlickr({'flickr.photos.setMeta': '<rsp stat="ok"/>'}, auth_token='TOK')
    f.call('flickr.photos.setMeta', {'photo_id': '1', 'title': 'a title'}, write=True)
    request = f.requests[0]
    assert request.http_method == 'POST'
    assert b'title=a%20title' in request.body
    assert '?' not in request.uri


def test_photos_search():
    f = FakeFlickr({'flickr.photos.search': PHOTOS_SEARCH_XML})
    photos = f.photos_search(user_id='47058503995@N01', tags=['cat', 'dog'])
    assert [p.id for p in photos] == ['2636', '2635', '2633']
    assert 'tags=cat%2Cdog' in f.requests[0].uri


def test_people_get_info():
    f = FakeFlickr({'flickr.people.getInfo': PERSON_XML})
    assert f.people_get_info('12037949754@N01')['realname'].string == 'Cal Henderson'


def test_tags_get_list_photo():
    xml = '<rsp stat="ok"><photo id="2733"><tags><tag id="1" raw="woo yay">wooyay</tag></tags></photo></rsp>'
    f = FakeFlickr({'flickr.tags.getListPhoto': xml})
    tag, = f.tags_get_list_photo('2733')
    assert tag['raw'].string == 'woo yay'


def test_groups_discuss_topics_get_info():
    xml = '<rsp stat="ok"><topic topic_id="7" subject="Hi"><message>Text</message></topic></rsp>'
    f = FakeFlickr({'flickr.groups.discuss.topics.getInfo': xml})
    topic = f.groups_discuss_topics_get_info('7')
    assert topic.id == '7'
    assert topic['subject'].string == 'Hi'


def test_test_echo_and_login():
    f = FakeFlickr({'flickr.test.echo': ECHO_XML, 'flickr.test.login': LOGIN_XML}, auth_token='TOK')
    assert f.test_echo(foo='bar') == {'method': 'flickr.test.echo', 'foo': 'bar'}
    assert 'auth_token' not in f.requests[0].uri
    user = f.test_login()
    assert user.id == '12037949754@N01'
    assert user['username'].string == 'bees'


def test_urls_lookup_user():
    f = FakeFlickr({'flickr.urls.lookupUser': LOOKUP_XML})
    assert f.urls_lookup_user('http://www.flickr.com/photos/bees/') == '12037949754@N01'
    assert 'url=http%3A%2F%2Fwww.flickr.com%2Fphotos%2Fbees%2F' in f.requests[0].uri


def test_api_error():
    f = FakeFlickr({'flickr.photos.getInfo': FAIL_XML})
    with pytest.raises(FlickrApiError) as e:
        f.photos_get_info('1')
    assert e.value.code == 1
    assert e.value.status == 1
    assert e.value.error is ApiError.METHOD_SPECIFIC
    assert e.value.message == 'Method flickr.photos.getInfo failed with error 1 - Photo not found'


def test_invalid_auth_token():
    f = FakeFlickr({'flickr.test.login': BAD_TOKEN_XML}, auth_token='TOK')
    with pytest.raises(FlickrAuthTokenInvalid) as e:
        f.test_login()
    assert e.value.error is ApiError.INVALID_AUTH_TOKEN
    assert e.value.submsg == ApiError.INVALID_AUTH_TOKEN.sub_message


def test_api_error_codes():
    assert ApiError.from_code(42) is ApiError.METHOD_SPECIFIC
    assert ApiError.from_code(100) is ApiError.INVALID_API_KEY
    assert ApiError.from_code(12345) is ApiError.UNKNOWN_ERROR
    assert ApiError.INVALID_API_KEY.title == 'Flickr Error: Invalid Api Key'


def test_parse_response():
    assert parse_response('<rsp/>').getroot().tag == 'rsp'
    assert parse_response(PHOTO_INFO_XML.encode('utf-8')).getroot().get('stat') == 'ok'
    with pytest.raises(FlickrError):
        parse_response('<rsp')
    with pytest.raises(FlickrApiError) as e:
        parse_response('<rsp stat="fail"/>')
    assert e.value.error is ApiError.UNKNOWN_ERROR


def test_missing_api_key():
    f = FakeFlickr({'flickr.test.echo': ECHO_XML}, api_key=None)
    with pytest.raises(MissingCredential):
        f.test_echo()
    assert f.requests == []


def test_missing_secret_when_signing():
    f = FakeFlickr({'flickr.test.login': LOGIN_XML}, secret=None, auth_token='TOK')
    with pytest.raises(MissingCredential):
        f.test_login()
    assert f.requests == []


def test_decode_failure_is_an_error():
    f = FakeFlickr({'flickr.photos.search': PHOTOS_SEARCH_XML})
    doc = f.call('flickr.photos.search')
    with pytest.raises(FlickrError):
        f.build_records(doc, '/rsp/photos/photo/@id', schemas.PHOTO)


def test_offline_xml_dir(tmp_path):
    (tmp_path / 'photos.search.xml').write_text(PHOTOS_SEARCH_XML, encoding='utf-8')
    f = FakeFlickr(xml_dir=str(tmp_path))
    assert len(f.photos_search(text='castle')) == 3
    with pytest.raises(FlickrError):
        f.people_get_info('x')


def test_request_delay(monkeypatch):
    clock = FakeClock()
    monkeypatch.setattr(flickr_module.time, 'monotonic', clock.monotonic)
    monkeypatch.setattr(flickr_module.time, 'sleep', clock.sleep)
    f = FakeFlickr({'flickr.test.echo': ECHO_XML}, request_delay=1000)
    f.test_echo()
    assert clock.sleeps == []
    clock.now += 0.25
    f.test_echo()
    assert clock.sleeps == [pytest.approx(0.75)]
    clock.now += 5
    f.test_echo()
    assert len(clock.sleeps) == 1


def test_set_request_delay():
    f = FakeFlickr()
    f.set_request_delay(250)
    assert f.request_delay == 250
    f.set_request_delay(-1)
    assert f.request_delay == 250


def test_fetch_through_opener():
    opener = FakeOpener(ECHO_XML.encode('utf-8'))
    f = Flickr('KEY', 'SECRET', opener=opener, request_delay=0)
    assert f.test_echo(foo='bar')['foo'] == 'bar'
    (req, timeout), = opener.requests
    assert req.get_method() == 'GET'
    assert req.full_url.startswith('https://www.flickr.com/services/rest/?foo=bar&method=flickr.test.echo')
    assert req.get_header('User-agent') == USER_AGENT
    assert timeout == flickr_module.HTTP_TIMEOUT


def test_fetch_post_body():
    opener = FakeOpener(b'<rsp stat="ok"/>')
    f = Flickr('KEY', 'SECRET', 'TOK', opener=opener, request_delay=0)
    f.call('flickr.photos.delete', {'photo_id': '1'}, write=True)
    req, _ = opener.requests[0]
    assert req.get_method() == 'POST'
    assert req.full_url == 'https://www.flickr.com/services/rest/'
    assert b'photo_id=1' in req.data
    assert req.get_header('Content-type') == 'application/x-www-form-urlencoded'


def test_fetch_http_error():
    error = urllib.error.HTTPError('https://www.flickr.com/', 500, 'Server Error', {}, None)
    f = Flickr('KEY', opener=FakeOpener(error=error), request_delay=0)
    with pytest.raises(FlickrNetError) as e:
        f.test_echo()
    assert e.value.status == 500


def test_fetch_timeout():
    f = Flickr('KEY', opener=FakeOpener(error=urllib.error.URLError('timed out')), request_delay=0)
    with pytest.raises(FlickrTimeout):
        f.test_echo()


def test_fetch_network_error():
    f = Flickr('KEY', opener=FakeOpener(error=urllib.error.URLError('no route')), request_delay=0)
    with pytest.raises(FlickrNetError) as e:
        f.test_echo()
    assert e.value.submsg == 'no route'


def test_oauth_flow():
    f = FakeFlickr({
        OAUTH_REQUEST_TOKEN_URI: 'oauth_callback_confirmed=true&oauth_token=RT&oauth_token_secret=RTS',
        OAUTH_ACCESS_TOKEN_URI: ('fullname=Jamal%20Fanaian&oauth_token=AT&oauth_token_secret=ATS'
                                 '&user_nsid=21207597%40N07&username=jamalfanaian'),
        'flickr.test.login': LOGIN_XML,
    }, oauth=OAuthCredentials('CK', 'CS'))

    assert f.oauth_request_token() == 'RT'
    request = f.requests[-1]
    assert request.api_method is None
    assert 'oauth_callback=oob' in request.uri
    assert 'oauth_signature=' in request.uri
    assert 'method' not in dict(request.pairs)

    uri = f.oauth_authorize_uri('write')
    assert uri.endswith('?oauth_token=RT&perms=write')

    token = f.oauth_access_token('VERIFIER')
    assert token['user_nsid'] == '21207597@N07'
    request = f.requests[-1]
    assert 'oauth_token=RT' in request.uri
    assert 'oauth_verifier=VERIFIER' in request.uri
    assert f.oauth.token == 'AT'
    assert f.oauth.token_secret == 'ATS'

    f.test_login()
    request = f.requests[-1]
    assert 'oauth_token=AT' in request.uri
    assert 'oauth_signature=' in request.uri
    assert 'api_key=' not in request.uri


def test_oauth_unconfirmed_request_token():
    f = FakeFlickr({OAUTH_REQUEST_TOKEN_URI: 'oauth_token=RT&oauth_token_secret=RTS'},
                   oauth=OAuthCredentials('CK', 'CS'))
    with pytest.raises(FlickrError):
        f.oauth_request_token()


def test_oauth_needs_client_credentials():
    f = FakeFlickr()
    with pytest.raises(MissingCredential):
        f.oauth_request_token()
    f = FakeFlickr(oauth=OAuthCredentials('CK', 'CS'))
    with pytest.raises(MissingCredential):
        f.oauth_authorize_uri()


def test_repr_hides_secret():
    assert 'fake-secret' not in repr(FakeFlickr())


def test_oauth_call_without_auth_is_signed():
    f = FakeFlickr({'flickr.test.echo': ECHO_XML}, oauth=OAuthCredentials('CK', 'CS', 'T', 'TS'))
    request = f.prepare('flickr.test.echo', {'foo': 'bar'}, need_auth=False)
    assert request.signed
    assert 'oauth_consumer_key=CK' in request.uri
    assert 'oauth_signature=' in request.uri
    assert 'api_key=' not in request.uri
    f.test_echo(foo='bar')
    assert 'oauth_signature=' in f.requests[0].uri


def test_non_numeric_fault_code():
    with pytest.raises(FlickrApiError) as e:
        parse_response('<rsp stat="fail"><err code="oops" msg="Broken"/></rsp>', 'flickr.test.echo')
    assert e.value.code == 0
    assert e.value.error is ApiError.UNKNOWN_ERROR
    assert e.value.msg == 'Broken'


def test_token_response_without_token():
    f = FakeFlickr({OAUTH_REQUEST_TOKEN_URI: 'oauth_callback_confirmed=true&oauth_problem=nonce_used'},
                   oauth=OAuthCredentials('CK', 'CS'))
    with pytest.raises(FlickrError) as e:
        f.oauth_request_token()
    assert 'nonce_used' in e.value.submsg

    f = FakeFlickr({OAUTH_ACCESS_TOKEN_URI: 'oauth_problem=token_rejected'},
                   oauth=OAuthCredentials('CK', 'CS', 'RT', 'RTS'))
    with pytest.raises(FlickrError):
        f.oauth_access_token('VERIFIER')
    assert f.oauth.token == 'RT'
