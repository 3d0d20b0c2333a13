"""Command-line interface for checking CUSIP identifiers."""

import logging
import sys

import click

from . import __version__
from .batch import check_lines, count_lines, open_text, summarize, write_results_csv
from .errors import CUSIPError
from .parsing import build_from_payload, parse, parse_loose, parse_strict


def _configure_logging(verbose, quiet):
    level = max(logging.DEBUG, logging.WARNING + 10 * (quiet - verbose))
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _mode(lenient, loose):
    if loose:
        return "loose-lenient" if lenient else "loose"
    return "lenient" if lenient else "strict"


@click.group()
@click.version_option(version=__version__, prog_name="cusip")
@click.option("-v", "--verbose", count=True, help="Log more detail (repeatable).")
@click.option("-q", "--quiet", count=True, help="Log less detail (repeatable).")
def cli(verbose, quiet):
    """
    Validate CUSIP security identifiers.

    A CUSIP is a six character issuer number, a two character issue number
    and a single check digit.
    """
    _configure_logging(verbose, quiet)


@cli.command("parse")
@click.argument("text")
@click.option(
    "--lenient/--strict",
    default=False,
    help="Accept an incorrect check digit as long as the layout is valid (default: --strict).",
)
@click.option(
    "--loose",
    is_flag=True,
    help="Strip surrounding whitespace and uppercase letters before parsing.",
)
def parse_command(text, lenient, loose):
    """
    Parse a single CUSIP and print its fields.

    Examples:

      cusip parse 023135106

      cusip parse --lenient 023135107
    """
    try:
        if loose:
            cusip = parse_loose(text, strict=not lenient)
        else:
            cusip = parse(text) if lenient else parse_strict(text)
    except CUSIPError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    click.echo(f"CUSIP:         {cusip}")
    click.echo(f"Issuer number: {cusip.issuer_num}")
    click.echo(f"Issue number:  {cusip.issue_num}")
    click.echo(f"Check digit:   {cusip.check_digit}")
    if lenient and not cusip.has_valid_check_digit:
        click.echo("Warning: check digit does not match the checksum")
    if cusip.is_cins:
        click.echo(f"CINS country:  {cusip.as_cins().country_code}")
    if cusip.is_private_use:
        click.echo("Private use:   yes")


@cli.command("check-digit")
@click.argument("payload")
def check_digit_command(payload):
    """
    Complete an 8 character PAYLOAD with its check digit.

    Example:

      cusip check-digit 02313510
    """
    try:
        cusip = build_from_payload(payload)
    except CUSIPError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    click.echo(str(cusip))


@cli.command("scan")
@click.argument(
    "files",
    nargs=-1,
    type=click.Path(exists=True, dir_okay=False, allow_dash=True),
)
@click.option(
    "--lenient/--strict",
    default=False,
    help="Skip check digit verification (default: --strict).",
)
@click.option("--loose", is_flag=True, help="Normalize each line before parsing.")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Write one CSV row per checked line to this path.",
)
@click.option(
    "--progress/--no-progress",
    default=False,
    help="Display a tqdm progress bar while checking.",
)
@click.option("--fail-fast", is_flag=True, help="Stop at the first invalid line.")
def scan_command(files, lenient, loose, output, progress, fail_fast):
    """
    Check candidate CUSIPs, one per line, from FILES or standard input.

    Files ending in .gz are decompressed. Exits with status 1 when any
    line is invalid.

    Examples:

      cusip scan cusips.txt

      gzcat cusips-us.txt.gz | cusip scan --output results.csv
    """
    mode = _mode(lenient, loose)
    results = []
    sources = files or ("-",)
    for source in sources:
        if source == "-":
            handle = click.open_file("-", "r", encoding="utf-8", errors="replace")
            total = None
        else:
            handle = open_text(source)
            total = count_lines(source) if progress else None
        with handle:
            for result in check_lines(
                handle, mode=mode, show_progress=progress, total_hint=total
            ):
                results.append(result)
                if fail_fast and not result.valid:
                    break
        if fail_fast and results and not results[-1].valid:
            break

    if output:
        write_results_csv(results, output)

    summary = summarize(results)
    for kind, count in summary.iter_rows():
        click.echo(f"{kind}: {count}")

    failures = [result for result in results if not result.valid]
    for result in failures[:10]:
        click.echo(f"line {result.line}: {result.text!r}: {result.message}", err=True)
    if failures:
        sys.exit(1)


if __name__ == "__main__":
    cli()
