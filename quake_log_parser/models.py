"""Database models for storing parsed Quake matches."""
import logging
from typing import Any, Dict, List

from sqlalchemy import Column, Integer, String, ForeignKey, create_engine
from sqlalchemy.orm import Session, declarative_base, relationship

from quake_log_parser.match import MatchRecord
from quake_log_parser.report import report_key

logger = logging.getLogger("quake_log_parser")

Base = declarative_base()


class Match(Base):
    """Match table storing one row per parsed match."""
    __tablename__ = 'matches'

    match_id = Column(String, primary_key=True)  # "<source_file>-game_01"
    match_number = Column(Integer, nullable=False)
    source_file = Column(String, nullable=False)
    total_kills = Column(Integer, nullable=False, default=0)

    # Relationships
    players = relationship("Player", back_populates="match", cascade="all, delete-orphan")
    player_kills = relationship("PlayerKill", back_populates="match", cascade="all, delete-orphan")
    kill_means = relationship("KillMeans", back_populates="match", cascade="all, delete-orphan")


class Player(Base):
    """Players registered in a match."""
    __tablename__ = 'players'

    player_id = Column(Integer, primary_key=True, autoincrement=True)
    match_id = Column(String, ForeignKey('matches.match_id'), nullable=False)
    player_name = Column(String, nullable=False)

    # Relationships
    match = relationship("Match", back_populates="players")


class PlayerKill(Base):
    """Net kill count per player and match; may be negative."""
    __tablename__ = 'player_kills'

    id = Column(Integer, primary_key=True, autoincrement=True)
    match_id = Column(String, ForeignKey('matches.match_id'), nullable=False)
    player_name = Column(String, nullable=False)
    kills = Column(Integer, nullable=False, default=0)

    # Relationships
    match = relationship("Match", back_populates="player_kills")


class KillMeans(Base):
    """Kills per cause of death and match."""
    __tablename__ = 'kill_means'

    id = Column(Integer, primary_key=True, autoincrement=True)
    match_id = Column(String, ForeignKey('matches.match_id'), nullable=False)
    means = Column(String, nullable=False)
    kills = Column(Integer, nullable=False, default=0)

    # Relationships
    match = relationship("Match", back_populates="kill_means")


def init_db(engine_url: str) -> Any:
    """Initialize the database with the schema and return its engine."""
    engine = create_engine(engine_url)
    Base.metadata.create_all(engine)
    return engine


def match_id_for(source_file: str, record: MatchRecord) -> str:
    return f"{source_file}-{report_key(record.number)}"


def clear_existing_matches(session: Session, source_file: str) -> int:
    """Delete every stored match that came from ``source_file``.

    Returns:
        Number of matches removed
    """
    matches = session.query(Match).filter_by(source_file=source_file).all()
    if not matches:
        return 0

    logger.info(f"Clearing {len(matches)} existing matches for {source_file}")
    # Child rows go through the relationship cascades
    for match in matches:
        session.delete(match)
    session.flush()
    return len(matches)


def save_matches(session: Session, records: List[MatchRecord], source_file: str) -> int:
    """Store finalized matches, replacing earlier rows from the same source.

    Args:
        session: Database session
        records: Finalized matches to store
        source_file: Name of the log the matches were parsed from

    Returns:
        Number of matches stored
    """
    clear_existing_matches(session, source_file)

    for record in records:
        match = Match(
            match_id=match_id_for(source_file, record),
            match_number=record.number,
            source_file=source_file,
            total_kills=record.total_kills,
        )
        match.players = [Player(player_name=name) for name in sorted(record.players)]
        match.player_kills = [
            PlayerKill(player_name=name, kills=kills) for name, kills in sorted(record.kills.items())
        ]
        match.kill_means = [
            KillMeans(means=means, kills=kills) for means, kills in sorted(record.kills_by_means.items())
        ]
        session.add(match)

    session.commit()
    logger.info(f"Stored {len(records)} matches from {source_file}")
    return len(records)


def load_match_summaries(session: Session) -> List[Dict[str, Any]]:
    """Read back stored matches ordered by source file and match number."""
    summaries = []
    for match in session.query(Match).order_by(Match.source_file, Match.match_number):
        summaries.append({
            "match_id": match.match_id,
            "source_file": match.source_file,
            "match_number": match.match_number,
            "total_kills": match.total_kills,
            "players": sorted(p.player_name for p in match.players),
            "kills": {pk.player_name: pk.kills for pk in match.player_kills},
            "kills_by_means": {km.means: km.kills for km in match.kill_means},
        })
    return summaries
