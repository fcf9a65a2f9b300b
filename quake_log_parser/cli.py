"""Command-line interface for the Quake log parser."""
import logging
from pathlib import Path

import click
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from .config.config import ParserConfig, configure_logging
from .display import format_match_reports, load_report
from .exceptions import QuakeLogParserError
from .models import init_db, load_match_summaries, save_matches
from .parser import LogParser
from .report import ReportGenerator

logger = logging.getLogger(__name__)


def _build_config(verbose: bool, quiet: bool, **overrides) -> ParserConfig:
    config = ParserConfig.from_env()
    for name, value in overrides.items():
        if value is not None:
            setattr(config, name, value)
    if verbose:
        config.log_level = logging.DEBUG
    if quiet:
        config.show_progress = False
    configure_logging(config)
    return config


@click.group()
@click.version_option()
def main():
    """Quake III Arena log parser CLI."""
    pass


@main.command()
@click.argument("log_file", type=click.Path(dir_okay=False))
@click.option("--output", "-o", help="Output JSON report path", default=None)
@click.option("--db", "db_path", help="Also store the matches in this SQLite database", default=None)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--quiet", "-q", is_flag=True, help="Suppress progress display")
@click.pass_context
def parse(ctx, log_file, output, db_path, verbose, quiet):
    """Parse a Quake log file into a JSON match report."""
    config = _build_config(verbose, quiet, report_path=output, db_path=db_path)

    logger.info(f"Parsing log file: {log_file}")
    logger.info(f"Output report: {config.report_path}")

    try:
        result = LogParser(config).parse_file(log_file)
    except QuakeLogParserError as e:
        logger.error(f"Failed to parse log file: {e}")
        ctx.exit(1)

    if result.is_empty():
        click.echo("No matches found")
        return

    try:
        ReportGenerator(result.records()).save_json(config.report_path)
    except QuakeLogParserError as e:
        logger.error(str(e))
        ctx.exit(1)

    if config.db_path:
        try:
            engine = init_db(f"sqlite:///{config.db_path}")
            Session = sessionmaker(bind=engine)
            with Session() as session:
                save_matches(session, result.records(), Path(log_file).stem)
        except SQLAlchemyError as e:
            logger.error(f"Error storing matches in {config.db_path}: {e}")
            ctx.exit(1)
        logger.info(f"Stored matches in {config.db_path}")

    click.echo(f"Report generated successfully in {config.report_path} ({len(result)} matches)")


@main.command()
@click.argument("report_file", type=click.Path(dir_okay=False), required=False)
@click.option("--limit", "-n", type=int, default=None, help="Number of games to display")
@click.pass_context
def show(ctx, report_file, limit):
    """Display the matches of a saved JSON report."""
    config = _build_config(False, True)
    report_file = report_file or config.report_path

    try:
        report = load_report(report_file)
    except QuakeLogParserError as e:
        logger.error(f"Error reading JSON report: {e}")
        ctx.exit(1)

    if limit is None and report.get("match_reports"):
        limit = click.prompt("Enter the number of games to display", default=config.display_limit, type=int)
    if limit is not None and limit <= 0:
        click.echo(f"Invalid input. Using default value of {config.display_limit}.")
        limit = config.display_limit

    for line in format_match_reports(report, limit or config.display_limit):
        click.echo(line)


@main.command()
@click.argument("log_file", type=click.Path(dir_okay=False))
@click.option("--quiet", "-q", is_flag=True, help="Suppress progress display")
@click.pass_context
def ranking(ctx, log_file, quiet):
    """Print the player ranking over all matches of a log file."""
    config = _build_config(False, quiet)

    try:
        result = LogParser(config).parse_file(log_file)
    except QuakeLogParserError as e:
        logger.error(f"Failed to parse log file: {e}")
        ctx.exit(1)

    if result.is_empty():
        click.echo("No matches found")
        return

    for position, entry in enumerate(ReportGenerator(result.records()).player_ranking(), start=1):
        click.echo(f"{position:3}. {entry['player']:<24} {entry['kills']:4}")


@main.command()
@click.argument("db_file", type=click.Path(exists=True, readable=True, dir_okay=False))
@click.pass_context
def info(ctx, db_file):
    """Display information about matches stored in a SQLite database."""
    # Read only: never create tables in a database we did not write
    engine = create_engine(f"sqlite:///{db_file}")
    Session = sessionmaker(bind=engine)
    try:
        with Session() as session:
            summaries = load_match_summaries(session)
    except SQLAlchemyError as e:
        logger.error(f"Error reading database: {e}")
        ctx.exit(1)
    finally:
        engine.dispose()

    if not summaries:
        click.echo("No matches found in database")
        return

    click.echo(f"Found {len(summaries)} matches in database:")
    for summary in summaries:
        click.echo(f"\nMatch ID: {summary['match_id']}")
        click.echo(f"Total kills: {summary['total_kills']}")
        click.echo(f"Players ({len(summary['players'])}): {', '.join(summary['players'])}")
        click.echo("Kills by means:")
        for means, kills in sorted(summary["kills_by_means"].items()):
            click.echo(f"  {means:<24} {kills:4}")


if __name__ == "__main__":
    main()
