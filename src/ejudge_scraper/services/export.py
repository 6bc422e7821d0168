"""Writes extracted contest results to an output directory."""

import re
from pathlib import Path

from loguru import logger

from ejudge_scraper.domain.exceptions import ExportError
from ejudge_scraper.domain.models import ContestResults, Submission
from ejudge_scraper.schemas import ContestResultsSchema

# Checked in order against the lowercased language label; first prefix wins
LANGUAGE_EXTENSIONS: list[tuple[str, str]] = [
    ("clang++", ".cpp"),
    ("g++", ".cpp"),
    ("c++", ".cpp"),
    ("clang", ".c"),
    ("gcc", ".c"),
    ("python", ".py"),
    ("pypy", ".py"),
    ("fpc", ".pas"),
    ("dcc", ".pas"),
    ("pascal", ".pas"),
    ("javac", ".java"),
    ("java", ".java"),
    ("kotlin", ".kt"),
    ("mcs", ".cs"),
    ("csharp", ".cs"),
    ("gccgo", ".go"),
    ("golang", ".go"),
    ("rust", ".rs"),
    ("ruby", ".rb"),
    ("perl", ".pl"),
    ("php", ".php"),
    ("node", ".js"),
    ("scala", ".scala"),
    ("ghc", ".hs"),
]
DEFAULT_EXTENSION = ".txt"

CONTEST_FILE = "contest.json"
SUMMARY_FILE = "summary.html"
STANDINGS_HTML_FILE = "standings.html"
STANDINGS_PDF_FILE = "standings.pdf"
SOURCES_DIR = "sources"


def extension_for(language: str) -> str:
    """File extension for a judge language label such as ``g++`` or ``python3``."""
    label = language.strip().lower()
    for prefix, extension in LANGUAGE_EXTENSIONS:
        if label.startswith(prefix):
            return extension
    return DEFAULT_EXTENSION


def source_filename(submission: Submission) -> str:
    stem = re.sub(r"[^\w.-]", "_", submission.problem_id) or "_"
    return f"{stem}{extension_for(submission.language)}"


class ContestExporter:
    """Persists one run's results: JSON dump, sources, summary and standings."""

    def export(self, results: ContestResults, output_dir: Path) -> Path:
        """
        Write ``results`` under ``output_dir``.

        Returns:
            The output directory

        Raises:
            ExportError: If a submission refers to an unknown problem, two sources
                map to the same file name, or a file cannot be written
        """
        self._check_problems(results)
        self._check_filenames(results)

        try:
            output_dir.mkdir(parents=True, exist_ok=True)

            schema = ContestResultsSchema.from_results(results)
            (output_dir / CONTEST_FILE).write_text(schema.model_dump_json(indent=2), encoding="utf-8")

            (output_dir / SUMMARY_FILE).write_text(
                f"<table>{results.summary.table_html}</table>", encoding="utf-8"
            )
            (output_dir / STANDINGS_HTML_FILE).write_text(results.standings.html, encoding="utf-8")
            if results.standings_pdf is not None:
                (output_dir / STANDINGS_PDF_FILE).write_bytes(results.standings_pdf)

            sources_dir = output_dir / SOURCES_DIR
            sources_dir.mkdir(exist_ok=True)
            for submission in results.submissions:
                path = sources_dir / source_filename(submission)
                path.write_bytes(submission.source or b"")
                logger.debug(f"Wrote {path}")

        except OSError as e:
            logger.error(f"Failed to write results to {output_dir}: {e}")
            raise ExportError(f"Failed to write results to {output_dir}: {e}") from e

        logger.info(
            f"Exported {len(results.problems)} problem(s) and "
            f"{len(results.submissions)} source(s) to {output_dir}"
        )
        return output_dir

    def _check_problems(self, results: ContestResults) -> None:
        known = {problem.id for problem in results.problems}
        missing = [s.problem_id for s in results.submissions if s.problem_id not in known]
        if missing:
            logger.error(f"Submissions for unknown problems: {missing}")
            raise ExportError(f"Submissions refer to unknown problems: {missing}")

    def _check_filenames(self, results: ContestResults) -> None:
        owners: dict[str, str] = {}
        for submission in results.submissions:
            name = source_filename(submission)
            if name in owners:
                logger.error(
                    f"Problems {owners[name]!r} and {submission.problem_id!r} both map to {name}"
                )
                raise ExportError(
                    f"Source file name collision: {owners[name]!r} and "
                    f"{submission.problem_id!r} both map to {name}"
                )
            owners[name] = submission.problem_id
