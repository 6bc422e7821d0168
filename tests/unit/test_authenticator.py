"""Unit tests for the login step."""

from urllib.parse import parse_qs, urlparse

import pytest

from ejudge_scraper.domain.exceptions import FetchError, LinkNotFoundError
from ejudge_scraper.services import Authenticator, Credentials

BASE_URL = "http://h/~ejudge/team.cgi"
CREDENTIALS = Credentials(username="team7", password="s3cret", contest_id=10521)


def login_response(href: str) -> str:
    return (
        '<div class="user_actions"><table><tr>'
        f'<td class="contest_actions_item"><a href="{href}">Enter contest</a></td>'
        "</tr></table></div>"
    )


@pytest.mark.asyncio
async def test_login_returns_entry_point(http_client, make_document, context):
    authenticator = Authenticator(http_client, BASE_URL, CREDENTIALS)
    http_client.add_page(
        authenticator.login_url, make_document(login_response("http://h/team.cgi?SID=abc123"))
    )

    session = await authenticator.login(context)

    assert session.entry_url == "http://h/team.cgi?SID=abc123"
    assert session.session_id == "abc123"
    assert http_client.calls == [authenticator.login_url]


def test_login_url_carries_credentials():
    authenticator = Authenticator(None, BASE_URL + "?stale=1", CREDENTIALS)

    parsed = urlparse(authenticator.login_url)
    query = parse_qs(parsed.query)

    assert parsed.path == "/~ejudge/team.cgi"
    assert query == {
        "contest_id": ["10521"],
        "locale_id": ["0"],
        "login": ["team7"],
        "password": ["s3cret"],
        "role": ["0"],
        "submit": ["Log in"],
    }


@pytest.mark.asyncio
async def test_relative_entry_link_is_resolved(http_client, make_document, context):
    authenticator = Authenticator(http_client, BASE_URL, CREDENTIALS)
    http_client.add_page(authenticator.login_url, make_document(login_response("team.cgi?SID=s")))

    session = await authenticator.login(context)

    assert session.entry_url == "http://h/~ejudge/team.cgi?SID=s"


@pytest.mark.asyncio
async def test_missing_entry_link_fails(http_client, make_document, context):
    authenticator = Authenticator(http_client, BASE_URL, CREDENTIALS)
    http_client.add_page(authenticator.login_url, make_document("<p>Invalid login</p>"))

    with pytest.raises(LinkNotFoundError):
        await authenticator.login(context)


@pytest.mark.asyncio
async def test_login_fetch_failure_propagates(http_client, context):
    authenticator = Authenticator(http_client, BASE_URL, CREDENTIALS)

    with pytest.raises(FetchError):
        await authenticator.login(context)


def test_credentials_repr_hides_password():
    assert "s3cret" not in repr(CREDENTIALS)


@pytest.mark.asyncio
async def test_entry_link_resolves_against_redirected_url(http_client, make_document, context):
    authenticator = Authenticator(http_client, BASE_URL, CREDENTIALS)
    http_client.add_page(
        authenticator.login_url, make_document(login_response("new-client?SID=X&amp;action=2"))
    )
    http_client.redirects[authenticator.login_url] = "http://h/cgi-bin/new-client?SID=X"

    session = await authenticator.login(context)

    assert session.entry_url == "http://h/cgi-bin/new-client?SID=X&action=2"
    assert session.session_id == "X"
