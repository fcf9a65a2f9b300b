"""Line classification functions for parsing Quake III Arena log lines."""
import re
import logging
from dataclasses import dataclass
from typing import Optional, Union

logger = logging.getLogger("quake_log_parser")

# Line markers
MATCH_START_MARKER = "InitGame:"
MATCH_END_MARKER = "ShutdownGame:"
KILL_MARKER = "Kill:"

# Killer name used by the server for environmental deaths
WORLD_SENTINEL = "<world>"

# Regular expressions for parsing
# e.g. "  20:54 Kill: 1022 2 22: <world> killed Isgalamido by MOD_TRIGGER_HURT"
KILL_PATTERN = re.compile(
    r"^\s*(\d+:\d+)\s+Kill:\s+(\d+)\s+(\d+)\s+(\d+):\s(.+)\skilled\s(.+)\sby\s(.+)$"
)


@dataclass(frozen=True)
class MatchStart:
    """An ``InitGame:`` line."""


@dataclass(frozen=True)
class MatchEnd:
    """A ``ShutdownGame:`` line."""


@dataclass(frozen=True)
class KillEvent:
    """A kill line with its free-text fields taken verbatim."""
    killer: str
    victim: str
    cause: str

    @property
    def is_world_kill(self) -> bool:
        return self.killer == WORLD_SENTINEL


@dataclass(frozen=True)
class Unrecognized:
    """A line that carries nothing for the parser.

    ``malformed`` is set when the line contains the kill marker but does not
    match the full kill pattern.
    """
    malformed: bool = False


LineEvent = Union[MatchStart, MatchEnd, KillEvent, Unrecognized]

_UNRECOGNIZED = Unrecognized()
_MALFORMED = Unrecognized(malformed=True)


def parse_kill(line: str) -> Optional[KillEvent]:
    """
    Extract killer, victim and cause from a kill line.

    Args:
        line: The log line, without its trailing newline

    Returns:
        KillEvent: The parsed kill, or None if the line is not a valid kill line
    """
    match = KILL_PATTERN.match(line)
    if not match:
        return None
    return KillEvent(killer=match.group(5), victim=match.group(6), cause=match.group(7))


def classify_line(line: str) -> LineEvent:
    """
    Classify a single log line.

    Start and end markers are plain substring checks and take precedence over
    the kill pattern.

    Args:
        line: A raw log line; a trailing newline is ignored

    Returns:
        LineEvent: MatchStart, MatchEnd, KillEvent or Unrecognized
    """
    line = line.rstrip("\r\n")

    if MATCH_START_MARKER in line:
        return MatchStart()
    if MATCH_END_MARKER in line:
        return MatchEnd()

    kill = parse_kill(line)
    if kill is not None:
        return kill

    if KILL_MARKER in line:
        logger.debug(f"Line has a kill marker but does not match the kill pattern: {line!r}")
        return _MALFORMED
    return _UNRECOGNIZED
