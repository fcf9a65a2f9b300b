"""Report generation from parsed Quake matches."""
import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

from quake_log_parser.exceptions import ReportWriteError
from quake_log_parser.match import MatchRecord

logger = logging.getLogger("quake_log_parser")


def report_key(number: int) -> str:
    """Zero-padded key used for a match in reports, e.g. ``game_01``."""
    return f"game_{number:02d}"


def match_summary(record: MatchRecord) -> Dict[str, Any]:
    """Convert a match record to its report entry."""
    return {
        "total_kills": record.total_kills,
        "players": sorted(record.players),
        "kills": dict(record.kills),
    }


class ReportGenerator:
    """Builds JSON-ready reports from finalized match records."""

    def __init__(self, records: Iterable[MatchRecord]):
        """
        Args:
            records: Finalized matches, e.g. ``ParseResult.records()``
        """
        self.records = sorted(records, key=lambda r: r.number)

    def match_reports(self) -> Dict[str, Dict[str, Any]]:
        return {report_key(r.number): match_summary(r) for r in self.records}

    def kill_by_means_reports(self) -> Dict[str, Dict[str, Any]]:
        return {
            report_key(r.number): {"kills_by_means": dict(r.kills_by_means)}
            for r in self.records
        }

    def player_ranking(self) -> List[Dict[str, Any]]:
        """Net kills per player summed over all matches, best first.

        Ties are ordered by player name so the ranking is deterministic.
        """
        scores = defaultdict(int)
        for record in self.records:
            for player, kills in record.kills.items():
                scores[player] += kills

        ranking = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
        return [{"player": player, "kills": kills} for player, kills in ranking]

    def build(self) -> Dict[str, Any]:
        return {
            "match_reports": self.match_reports(),
            "kill_by_means_reports": self.kill_by_means_reports(),
            "player_ranking": self.player_ranking(),
        }

    def save_json(self, filename: Union[str, Path]) -> Dict[str, Any]:
        """Write the full report to ``filename`` and return it.

        Raises:
            ReportWriteError: The file cannot be written
        """
        report = self.build()
        try:
            with open(filename, 'w', encoding='utf-8') as f:
                json.dump(report, f, indent=2, ensure_ascii=False)
                f.write("\n")
        except OSError as e:
            raise ReportWriteError(filename, e.strerror or str(e)) from e
        logger.info(f"Wrote report for {len(self.records)} matches to {filename}")
        return report
