"""Runtime settings loaded from the environment."""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from ejudge_scraper.domain.exceptions import ConfigurationError

DEFAULT_URL = "http://opentrains.snarknews.info/~ejudge/team.cgi"


def _parse_bool(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in ("1", "true", "yes", "on"):
        return True
    if normalized in ("0", "false", "no", "off"):
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


def _parse_number(name: str, value: str, kind: type) -> Any:
    try:
        return kind(value)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be {kind.__name__}, got {value!r}") from e


@dataclass(frozen=True)
class Settings:
    """Everything needed for one scraping run."""

    base_url: str = DEFAULT_URL
    username: str = ""
    password: str = ""
    contest_id: Optional[int] = None
    timeout: float = 5.0
    output_dir: Path = Path("out")
    render_pdf: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Settings":
        """Load settings from environment variables (and ``.env`` if present)."""
        load_dotenv(env_file)

        contest_id = os.getenv("EJUDGE_CONTEST_ID")
        timeout = os.getenv("EJUDGE_TIMEOUT")
        render_pdf = os.getenv("EJUDGE_RENDER_PDF")

        return cls(
            base_url=os.getenv("EJUDGE_URL", DEFAULT_URL),
            username=os.getenv("EJUDGE_USERNAME", ""),
            password=os.getenv("EJUDGE_PASSWORD", ""),
            contest_id=_parse_number("EJUDGE_CONTEST_ID", contest_id, int) if contest_id else None,
            timeout=_parse_number("EJUDGE_TIMEOUT", timeout, float) if timeout else 5.0,
            output_dir=Path(os.getenv("EJUDGE_OUTPUT_DIR", "out")),
            render_pdf=_parse_bool("EJUDGE_RENDER_PDF", render_pdf) if render_pdf else True,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def override(self, **changes: Any) -> "Settings":
        """Copy with every non-None value of ``changes`` applied."""
        return replace(self, **{key: value for key, value in changes.items() if value is not None})

    def validate(self) -> "Settings":
        """
        Check that a run can be started with these settings.

        Raises:
            ConfigurationError: If a required value is missing or invalid
        """
        if not self.username:
            raise ConfigurationError("username is required (EJUDGE_USERNAME or --username)")
        if self.contest_id is None:
            raise ConfigurationError("contest id is required (EJUDGE_CONTEST_ID or --contest-id)")
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")
        return self
