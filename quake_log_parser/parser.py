"""Parser module for Quake III Arena server logs."""
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Union

from tqdm import tqdm

from quake_log_parser.config.config import ParserConfig
from quake_log_parser.exceptions import LogReadError, SourceUnavailableError
from quake_log_parser.match import MatchAccumulator, MatchRecord, match_key
from quake_log_parser.transformers import (
    KillEvent, MatchEnd, MatchStart, Unrecognized, classify_line
)


class ParseResult(Mapping):
    """Finalized matches keyed by ``game_N``, in the order they were found."""

    def __init__(self, matches: Dict[str, MatchRecord], malformed_lines: Optional[List[int]] = None):
        self._matches = dict(matches)
        self.malformed_lines = list(malformed_lines or [])

    def __getitem__(self, key: str) -> MatchRecord:
        return self._matches[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._matches)

    def __len__(self) -> int:
        return len(self._matches)

    def __repr__(self) -> str:
        return f"ParseResult({len(self)} matches, {len(self.malformed_lines)} malformed lines)"

    def is_empty(self) -> bool:
        return not self._matches

    def records(self) -> List[MatchRecord]:
        return list(self._matches.values())


class LogParser:
    """Parser for Quake III Arena game logs."""

    def __init__(self, config: Optional[ParserConfig] = None):
        """Initialize the parser with the given configuration.

        Args:
            config: Parser configuration object; defaults are used if omitted
        """
        self.config = config or ParserConfig()
        self.logger = logging.getLogger("quake_log_parser")
        self._reset_state()

    def _reset_state(self) -> None:
        """Reset the scan state so that every parse starts from match 1."""
        self.match_count = 0
        self.current_match: Optional[MatchAccumulator] = None
        self.matches: Dict[str, MatchRecord] = {}
        self.malformed_lines: List[int] = []
        self.line_num = 0

    def parse_lines(self, lines: Iterable[str]) -> ParseResult:
        """Parse a sequence of log lines.

        Args:
            lines: Log lines in file order, with or without trailing newlines

        Returns:
            The finalized matches found in the lines
        """
        self._reset_state()
        for line in lines:
            self._process_line(line)
        return self._finish()

    def parse_file(self, file_path: Union[str, Path]) -> ParseResult:
        """Parse a single log file.

        Args:
            file_path: Path to the log file to parse

        Returns:
            The finalized matches found in the file

        Raises:
            SourceUnavailableError: The file cannot be opened
            LogReadError: Reading failed part way through the file
        """
        self.logger.info(f"Parsing file: {file_path}")
        self._reset_state()

        try:
            f = open(file_path, 'r', encoding=self.config.encoding)
        except OSError as e:
            self.logger.error(f"Cannot open log file {file_path}: {e}")
            raise SourceUnavailableError(file_path, e.strerror or str(e)) from e

        with f:
            lines = tqdm(f, desc="Parsing log", unit=" lines", disable=not self.config.show_progress)
            try:
                for line in lines:
                    self._process_line(line)
            except (OSError, UnicodeDecodeError) as e:
                # Trailing input cannot be trusted, drop the open match
                self.current_match = None
                self.logger.error(f"Error reading {file_path} after line {self.line_num}: {e}")
                raise LogReadError(file_path, self.line_num, e) from e

        result = self._finish()
        self.logger.info(f"Successfully parsed file: {file_path} ({len(result)} matches)")
        return result

    def _process_line(self, line: str) -> None:
        """Advance the state machine by one line."""
        self.line_num += 1
        event = classify_line(line)

        if isinstance(event, MatchStart):
            self._start_match()
        elif isinstance(event, MatchEnd):
            if self.current_match is not None:
                self._store_current_match()
        elif isinstance(event, KillEvent):
            if self.current_match is not None:
                self.current_match.apply(event)
        elif isinstance(event, Unrecognized) and event.malformed:
            self.malformed_lines.append(self.line_num)
            self.logger.warning(f"Skipping malformed kill line {self.line_num}: {line.rstrip()}")

    def _start_match(self) -> None:
        if self.current_match is not None:
            self._store_current_match()
        self.match_count += 1
        self.current_match = MatchAccumulator(self.match_count)

    def _store_current_match(self) -> None:
        """Finalize the open match and (re)store it under its key.

        The accumulator stays open: kills seen after a ``ShutdownGame:`` line
        but before the next ``InitGame:`` are picked up by the next store.
        """
        record = self.current_match.finalize()
        self.matches[match_key(record.number)] = record
        self.logger.debug(f"Stored {record.key}: {record.total_kills} kills, {len(record.players)} players")

    def _finish(self) -> ParseResult:
        if self.current_match is not None:
            self._store_current_match()
        self.current_match = None

        if self.malformed_lines:
            self.logger.warning(f"Skipped {len(self.malformed_lines)} malformed kill lines")
        return ParseResult(self.matches, self.malformed_lines)


def parse_log_file(file_path: Union[str, Path], config: Optional[ParserConfig] = None) -> ParseResult:
    """Parse ``file_path`` with a fresh parser."""
    return LogParser(config).parse_file(file_path)
