"""Validate many candidate CUSIPs at once, one per line."""

from __future__ import annotations

import csv
import gzip
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, TextIO

import polars as pl
from tqdm import tqdm as terminal_tqdm
from tqdm.auto import tqdm as auto_tqdm

from .errors import CUSIPError
from .identifier import CUSIP
from .parsing import parse, parse_loose, parse_strict

logger = logging.getLogger(__name__)

MODES = ("strict", "lenient", "loose", "loose-lenient")

RESULT_COLUMNS = [
    "line",
    "input",
    "valid",
    "cusip",
    "issuer_num",
    "issue_num",
    "check_digit",
    "error",
    "message",
]


@dataclass(frozen=True)
class CheckResult:
    """Outcome of checking one input line."""

    line: int
    text: str
    cusip: CUSIP | None = None
    error: str | None = None
    message: str | None = None

    @property
    def valid(self) -> bool:
        return self.cusip is not None

    @property
    def kind(self) -> str:
        return self.error or "ok"

    def as_row(self) -> list[str | int]:
        cusip = self.cusip
        return [
            self.line,
            self.text,
            "true" if self.valid else "false",
            cusip.payload if cusip else "",
            cusip.issuer_num if cusip else "",
            cusip.issue_num if cusip else "",
            cusip.check_digit if cusip else "",
            self.error or "",
            self.message or "",
        ]


def scan_progress(total: int | None = None, use_notebook: bool | None = None):
    """
    Build the progress bar shown while checking lines.

    ``use_notebook=None`` lets ``tqdm.auto`` pick the widget or terminal bar,
    ``True`` forces the Jupyter widget and ``False`` the terminal bar.
    """
    if use_notebook is None:
        factory = auto_tqdm
    elif use_notebook:
        from tqdm.notebook import tqdm as factory
    else:
        factory = terminal_tqdm
    return factory(
        total=total,
        desc="Checking CUSIPs",
        unit="line",
        dynamic_ncols=True,
        mininterval=0.1,
        leave=True,
    )


def _parser_for(mode: str):
    if mode == "strict":
        return parse_strict
    if mode == "lenient":
        return parse
    if mode == "loose":
        return parse_loose
    if mode == "loose-lenient":
        return lambda text: parse_loose(text, strict=False)
    raise ValueError(f"mode must be one of {', '.join(MODES)}, not {mode!r}")


def check_lines(
    lines: Iterable[str],
    *,
    mode: str = "strict",
    show_progress: bool = False,
    total_hint: int | None = None,
    use_notebook: bool | None = None,
) -> Iterator[CheckResult]:
    """
    Check each non-blank line of ``lines`` as a CUSIP candidate.

    Only the trailing newline is removed before parsing, so other surrounding
    whitespace is reported as an error unless a ``loose`` mode is used.
    """
    parser = _parser_for(mode)
    progress = scan_progress(total_hint, use_notebook) if show_progress else None
    try:
        for number, raw in enumerate(lines, start=1):
            text = raw.rstrip("\r\n")
            if progress is not None:
                progress.update(1)
            if not text.strip():
                continue
            try:
                cusip = parser(text)
            except CUSIPError as exc:
                logger.debug("Line %s rejected: %s", number, exc)
                yield CheckResult(number, text, error=type(exc).__name__, message=str(exc))
            else:
                yield CheckResult(number, text, cusip=cusip)
    finally:
        if progress is not None:
            progress.close()


def open_text(path: Path | str) -> TextIO:
    """
    Open ``path`` for reading, decompressing ``.gz`` files.

    Undecodable bytes become U+FFFD so the line is reported as an invalid
    character instead of aborting the scan.
    """
    path = Path(path)
    if path.suffix == ".gz":
        return gzip.open(path, "rt", encoding="utf-8", errors="replace", newline="")
    return path.open("r", encoding="utf-8", errors="replace", newline="")


def count_lines(path: Path | str) -> int:
    """Count the lines of ``path``, used as the progress bar total."""

    with open_text(path) as handle:
        return sum(1 for _ in handle)


def check_file(path: Path | str, **kwargs) -> list[CheckResult]:
    """Check every line of the text file at ``path``."""

    logger.info("Checking CUSIPs in %s", path)
    with open_text(path) as handle:
        return list(check_lines(handle, **kwargs))


def write_results_csv(results: Iterable[CheckResult], path: Path | str) -> int:
    """Write ``results`` to ``path`` and return the number of rows written."""

    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with output_path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(RESULT_COLUMNS)
        for result in results:
            writer.writerow(result.as_row())
            count += 1
    logger.info("Wrote %s results to %s", count, output_path)
    return count


def summarize(results: Iterable[CheckResult]) -> pl.DataFrame:
    """Count results per outcome, ``ok`` for parsed lines or the error class name."""

    kinds = [result.kind for result in results]
    if not kinds:
        return pl.DataFrame(
            {"kind": [], "count": []}, schema={"kind": pl.Utf8, "count": pl.UInt32}
        )
    return (
        pl.DataFrame({"kind": kinds})
        .group_by("kind")
        .agg(pl.len().alias("count"))
        .sort(["count", "kind"], descending=[True, False])
    )
