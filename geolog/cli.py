"""
CLI interface for geolog.

Usage:
    geolog analyze -i logfile.txt -m GeoIP2-City.mmdb
    geolog analyze -i logfile.txt -d 3000 --per-month --output json
"""

import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

import click
from pydantic import ValidationError

from geolog.config import Settings, settings as default_settings
from geolog.features.travelers.report import ReportGenerator
from geolog.features.travelers.models import Traveler
from geolog.features.travelers.service import TravelerAnalysisService, AnalysisReport
from geolog.services.ingestion import build_travelers
from geolog.services.ip_lookup import IPResolver
from geolog.services.log_parser import parse_log_file


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
        force=True,
    )


@click.group()
def cli():
    """Detect connections far from a user's usual location."""
    pass


@cli.command()
@click.option("-i", "--input", "src", default="logfile.txt", show_default=True,
              help="Source log file")
@click.option("-m", "--maxmind-db", default=None,
              help="Location of Maxmind database")
@click.option("-d", "--distance", default=None, type=float,
              help="Distance (km) an IP must be from the geocenter to alert")
@click.option("-k", "--google-key", default=None,
              help="Key to Google geocoding API")
@click.option("--per-month", is_flag=True, help="Compute one geocenter per user and month")
@click.option(
    "--output",
    default="console",
    type=click.Choice(["console", "json", "all"]),
    help="Output format"
)
@click.option("--output-dir", default="./reports", help="Output directory for files")
@click.option("-v", "--verbose", is_flag=True, help="Also print each traveler's geocenter")
@click.option("--log-level", default=None, help="Logging level (default from settings)")
def analyze(src, maxmind_db, distance, google_key, per_month, output, output_dir, verbose, log_level):
    """
    Flag connections far from each user's usual connection center.

    Reads a monthly hit log, resolves IPs with the MaxMind database,
    computes a weighted geocenter per user and prints every connection
    farther than the alert distance.
    """
    overrides = {}
    if maxmind_db is not None:
        overrides["maxmind_db_path"] = maxmind_db
    if distance is not None:
        overrides["alert_distance_km"] = distance
    if google_key is not None:
        overrides["google_api_key"] = google_key
    if per_month:
        overrides["group_by_month"] = per_month
    if log_level is not None:
        overrides["log_level"] = log_level

    try:
        run_settings = Settings(**{**default_settings.model_dump(), **overrides})
    except ValidationError as e:
        raise click.BadParameter(str(e))

    setup_logging(run_settings.log_level)

    generator = ReportGenerator()
    to_console = output in ["console", "all"]

    def echo_traveler(traveler: Traveler) -> None:
        for line in generator.traveler_lines(traveler, verbose=verbose):
            click.echo(line)

    try:
        report = asyncio.run(_run_analysis(
            src, run_settings, on_analyzed=echo_traveler if to_console else None
        ))
    except (OSError, ValueError, RuntimeError) as e:
        raise click.ClickException(str(e))

    if to_console:
        click.echo(generator.generate_console(report, include_travelers=False))

    if output in ["json", "all"]:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        json_path = Path(output_dir) / f"geolog_{timestamp}.json"
        generator.save_json(report, json_path)
        click.echo(f"JSON saved: {json_path}")


async def _run_analysis(
    src: str,
    run_settings: Settings,
    on_analyzed: Optional[Callable[[Traveler], None]] = None
) -> AnalysisReport:
    """Parse, resolve and analyze one log file."""
    entries = parse_log_file(src)

    with IPResolver(run_settings.maxmind_db_path) as resolver:
        ingested = build_travelers(entries, resolver, group_by_month=run_settings.group_by_month)

    for rejected in ingested.rejected:
        click.echo(f"rejected line {rejected.entry.line_no}: {rejected.reason}", err=True)

    service = TravelerAnalysisService(run_settings)
    return await service.run(ingested.travelers.values(), on_analyzed=on_analyzed)


def main(argv: Optional[list] = None):
    cli(args=argv)


if __name__ == "__main__":
    main()
