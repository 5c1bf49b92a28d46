import httpx
import pytest

from apibase import HTTPError
from apibase.http import CookieJar, parse_set_cookie
from tests._scripted import reply


@pytest.mark.parametrize(
    ('entry', 'expected'),
    [
        ('sid=abc; Path=/; HttpOnly', ('sid', 'sid=abc')),
        ('token=a=b=c', ('token', 'token=a=b=c')),
        ('flag', ('flag', 'flag')),
        ('empty=', ('empty', 'empty=')),
        ('=nameless', None),
        ('', None),
    ],
)
def test_parse_set_cookie(entry, expected):
    assert parse_set_cookie(entry) == expected


def test_last_write_wins_and_attributes_are_dropped():
    jar = CookieJar()

    jar.store(['a=1; Path=/', 'b=2', 'a=2; Path=/x'])

    assert jar.as_dict() == {'a': 'a=2', 'b': 'b=2'}
    assert jar.header_value() == 'a=2; b=2'


def test_success_without_set_cookie_leaves_jar_unchanged(make_client):
    client, _ = make_client(reply(200, 'ok'))
    client.cookies.store(['sid=1'])

    client.get('ping', suppress_log=True)

    assert client.cookies.as_dict() == {'sid': 'sid=1'}


def test_cookies_are_stored_and_replayed(make_client):
    client, server = make_client(
        reply(200, headers=[('Set-Cookie', 'a=1; Path=/'), ('Set-Cookie', 'a=2; Path=/x')]),
        reply(200, headers=[('Set-Cookie', 'b=7; HttpOnly')]),
        reply(200),
    )

    client.get('login', suppress_log=True)
    assert client.cookies['a'] == 'a=2'

    client.get('step', suppress_log=True)
    assert server.last.headers['Cookie'] == 'a=2'

    client.get('next', suppress_log=True)
    assert server.last.headers['Cookie'] == 'a=2; b=7'


def test_first_request_sends_no_cookie_header(make_client):
    client, server = make_client(reply(200))

    client.get('ping', suppress_log=True)

    assert 'Cookie' not in server.last.headers


def test_failed_responses_do_not_update_jar(make_client):
    client, _ = make_client(reply(500, 'no', headers=[('Set-Cookie', 'a=1')]))

    with pytest.raises(HTTPError):
        client.get('x', suppress_log=True)

    assert len(client.cookies) == 0


def test_retried_attempts_carry_the_same_cookies(make_client):
    client, server = make_client(reply(504), reply(200))
    client.cookies.store(['sid=9'])

    client.post_with_body('x', 'payload', suppress_log=True)

    assert [r.headers['Cookie'] for r in server.requests] == ['sid=9', 'sid=9']


def test_apply_sets_single_header():
    jar = CookieJar()
    jar.store(['x=1', 'y=2'])
    request = httpx.Request('GET', 'http://h.test/')

    jar.apply(request)

    assert request.headers.get_list('Cookie') == ['x=1; y=2']


def test_clear():
    jar = CookieJar()
    jar.store(['x=1'])

    jar.clear()

    assert 'x' not in jar
    assert jar.header_value() == ''
