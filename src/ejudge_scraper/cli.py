"""Command-line entry point."""

import argparse
import asyncio
import signal
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from ejudge_scraper.config import Settings
from ejudge_scraper.domain.exceptions import (
    ContestScraperError,
    OperationCancelledError,
    StageError,
)
from ejudge_scraper.infrastructure.context import OperationContext
from ejudge_scraper.services import create_scrape_service

EXIT_FAILURE = 1
EXIT_CANCELLED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ejudge-scraper",
        description="Download problems, sources and standings of an ejudge contest.",
    )
    parser.add_argument("--url", dest="base_url", help="judge team.cgi URL")
    parser.add_argument("--username")
    parser.add_argument("--password")
    parser.add_argument("--contest-id", type=int, help="numeric contest id (10521, 10523, ...)")
    parser.add_argument("--timeout", type=float, help="per-request timeout in seconds")
    parser.add_argument("--deadline", type=float, help="abort the whole run after this many seconds")
    parser.add_argument("-o", "--output", dest="output_dir", type=Path, help="output directory")
    parser.add_argument("--no-pdf", dest="render_pdf", action="store_false", default=None)
    parser.add_argument("--log-level")
    return parser


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level)


async def run(settings: Settings, deadline: Optional[float] = None) -> int:
    """Scrape one contest; returns the process exit status."""
    context = OperationContext(timeout=deadline)

    loop = asyncio.get_running_loop()
    handled: list[signal.Signals] = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _on_signal, sig, context)
            handled.append(sig)
        except NotImplementedError:
            # Windows event loops do not support signal handlers
            pass

    service = create_scrape_service(settings)
    try:
        output_dir = await service.scrape_and_export(settings.output_dir, context)
    except StageError as e:
        logger.error(f"Scraping failed in stage {e.stage!r} at {e.url}: {e.error}")
        return EXIT_CANCELLED if e.cancelled else EXIT_FAILURE
    except OperationCancelledError as e:
        logger.error(f"Scraping aborted: {e}")
        return EXIT_CANCELLED
    except ContestScraperError as e:
        logger.error(f"Scraping failed: {e}")
        return EXIT_FAILURE
    finally:
        await service.close()
        for sig in handled:
            loop.remove_signal_handler(sig)

    logger.info(f"Results written to {output_dir}")
    return 0


def _on_signal(sig: signal.Signals, context: OperationContext) -> None:
    logger.warning(f"Signal caught: {sig.name}")
    context.cancel(f"interrupted by {sig.name}")


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = (
            Settings.from_env()
            .override(
                base_url=args.base_url,
                username=args.username,
                password=args.password,
                contest_id=args.contest_id,
                timeout=args.timeout,
                output_dir=args.output_dir,
                render_pdf=args.render_pdf,
                log_level=args.log_level.upper() if args.log_level else None,
            )
            .validate()
        )
    except ContestScraperError as e:
        configure_logging("INFO")
        logger.error(str(e))
        return EXIT_FAILURE

    configure_logging(settings.log_level)
    return asyncio.run(run(settings, args.deadline))


if __name__ == "__main__":
    sys.exit(main())
