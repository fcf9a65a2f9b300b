"""Console rendering of saved match reports."""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from quake_log_parser.exceptions import ReportFormatError, SourceUnavailableError

logger = logging.getLogger("quake_log_parser")

DEFAULT_DISPLAY_LIMIT = 10
NO_REPORTS_MESSAGE = "No match reports found in JSON."


def load_report(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a JSON report written by ``ReportGenerator.save_json``.

    Args:
        path: Path to the report file

    Returns:
        dict: The decoded report

    Raises:
        SourceUnavailableError: The file cannot be read
        ReportFormatError: The file is not a JSON object of match reports
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            report = json.load(f)
    except OSError as e:
        raise SourceUnavailableError(path, e.strerror or str(e)) from e
    except json.JSONDecodeError as e:
        raise ReportFormatError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(report, dict):
        raise ReportFormatError(f"Expected a JSON object in {path}, got {type(report).__name__}")

    match_reports = report.get("match_reports", {})
    if not isinstance(match_reports, dict):
        raise ReportFormatError(f"'match_reports' in {path} must be an object, got {type(match_reports).__name__}")
    for game, entry in match_reports.items():
        if not isinstance(entry, dict):
            raise ReportFormatError(f"Match report {game!r} in {path} must be an object")
        if not isinstance(entry.get("kills", {}), dict):
            raise ReportFormatError(f"'kills' of {game!r} in {path} must be an object")
    return report


def format_match_reports(report: Dict[str, Any], limit: int = DEFAULT_DISPLAY_LIMIT) -> List[str]:
    """Render the first ``limit`` matches of a report, ordered by key."""
    match_reports = report.get("match_reports") or {}
    if not match_reports:
        return [NO_REPORTS_MESSAGE]

    if limit <= 0:
        logger.warning(f"Invalid display limit {limit}, using {DEFAULT_DISPLAY_LIMIT}")
        limit = DEFAULT_DISPLAY_LIMIT

    lines = []
    for game in sorted(match_reports)[:limit]:
        entry = match_reports[game]
        lines.append(f"Game: {game}")
        lines.append(f"  Total Kills: {entry.get('total_kills', 0)}")
        lines.append(f"  Players: {entry.get('players', [])}")
        lines.append("  Kills:")
        for player, kills in entry.get("kills", {}).items():
            lines.append(f"    {player}: {kills}")
        lines.append("")
    return lines
