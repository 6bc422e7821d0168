"""Helpers for building and rewriting judge URLs."""

from urllib.parse import parse_qs, parse_qsl, urlencode, urljoin, urlparse, urlunparse

from loguru import logger

from ejudge_scraper.domain.exceptions import URLParsingError

ALL_RUNS_PARAM = "all_runs"
SESSION_PARAM = "SID"
PASSWORD_PARAM = "password"


class URLParser:
    """URL operations for ejudge ``team.cgi``-style pages."""

    @classmethod
    def validate(cls, url: str) -> str:
        """Return ``url`` if it is absolute, raise otherwise."""
        try:
            parsed = urlparse(url)
        except ValueError as e:
            raise URLParsingError(f"Failed to parse URL: {url}") from e

        if not parsed.scheme or not parsed.netloc:
            raise URLParsingError(f"Invalid URL format: {url}")
        return url

    @classmethod
    def build_login_url(cls, base_url: str, username: str, password: str, contest_id: int) -> str:
        """
        Build the login request URL.

        Any query already present on ``base_url`` is replaced.
        """
        cls.validate(base_url)
        query = urlencode(
            [
                ("contest_id", str(contest_id)),
                ("locale_id", "0"),
                ("login", username),
                (PASSWORD_PARAM, password),
                ("role", "0"),
                ("submit", "Log in"),
            ]
        )
        url = urlunparse(urlparse(base_url)._replace(query=query))

        logger.debug(f"Built login URL: {cls.mask_password(url)}")
        return url

    @classmethod
    def resolve(cls, base_url: str, href: str) -> str:
        """Resolve ``href`` against the page it was found on."""
        return urljoin(base_url, href)

    @classmethod
    def with_all_runs(cls, url: str) -> str:
        """
        Set the flag that makes the submissions page list the whole run history.

        Any existing value of the flag is replaced; other query entries are kept.
        """
        parsed = urlparse(url)
        pairs = [
            (key, value)
            for key, value in parse_qsl(parsed.query, keep_blank_values=True)
            if key != ALL_RUNS_PARAM
        ]
        pairs.append((ALL_RUNS_PARAM, "1"))
        return urlunparse(parsed._replace(query=urlencode(pairs)))

    @classmethod
    def session_id(cls, url: str) -> str:
        """Extract the session id query parameter, empty if absent."""
        values = parse_qs(urlparse(url).query).get(SESSION_PARAM)
        return values[0] if values else ""

    @classmethod
    def mask_password(cls, url: str) -> str:
        """Hide the password query parameter for logging; other URLs are returned as is."""
        parsed = urlparse(url)
        pairs = parse_qsl(parsed.query, keep_blank_values=True)
        if not any(key == PASSWORD_PARAM for key, _ in pairs):
            return url

        pairs = [(key, "***" if key == PASSWORD_PARAM else value) for key, value in pairs]
        return urlunparse(parsed._replace(query=urlencode(pairs, safe="*")))
