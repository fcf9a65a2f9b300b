"""Tests for the transformers module."""
import unittest
from quake_log_parser.transformers import (
    KILL_PATTERN, WORLD_SENTINEL, KillEvent, MatchEnd, MatchStart, Unrecognized,
    classify_line, parse_kill
)


class TestTransformers(unittest.TestCase):
    """Test the line classification functions."""

    def test_classify_match_start(self):
        """Test InitGame lines open a match."""
        line = r"  0:00 InitGame: \sv_floodProtect\1\sv_maxPing\0\mapname\q3dm17"
        assert classify_line(line) == MatchStart()

    def test_classify_match_end(self):
        """Test ShutdownGame lines close a match."""
        assert classify_line(" 20:37 ShutdownGame:") == MatchEnd()
        assert classify_line(" 20:37 ShutdownGame:\n") == MatchEnd()

    def test_classify_kill(self):
        """Test a regular kill line."""
        event = classify_line(" 22:06 Kill: 2 3 7: Isgalamido killed Mocinha by MOD_ROCKET_SPLASH\n")
        assert event == KillEvent(killer="Isgalamido", victim="Mocinha", cause="MOD_ROCKET_SPLASH")
        assert not event.is_world_kill

    def test_classify_world_kill(self):
        """Test kills by the world sentinel."""
        event = classify_line("  0:54 Kill: 1022 2 22: <world> killed Isgalamido by MOD_TRIGGER_HURT")
        assert event.killer == WORLD_SENTINEL
        assert event.victim == "Isgalamido"
        assert event.cause == "MOD_TRIGGER_HURT"
        assert event.is_world_kill

    def test_names_with_spaces(self):
        """Test that free-text names keep their spaces."""
        event = parse_kill("  1:47 Kill: 1022 4 19: <world> killed Dono da Bola by MOD_FALLING")
        assert event.victim == "Dono da Bola"

        event = parse_kill("  2:11 Kill: 3 4 10: Assasinu Credi killed Dono da Bola by MOD_RAILGUN")
        assert event.killer == "Assasinu Credi"
        assert event.victim == "Dono da Bola"

    def test_fields_taken_verbatim(self):
        """Test that formatting characters in names are not stripped."""
        event = parse_kill("  3:00 Kill: 2 3 7: ^1Zeh^7 killed Oootsimo by MOD_SHOTGUN ")
        assert event.killer == "^1Zeh^7"
        assert event.cause == "MOD_SHOTGUN "

    def test_carriage_return_stripped(self):
        """Test Windows line endings do not leak into the cause."""
        event = classify_line("  3:00 Kill: 2 3 7: Zeh killed Oootsimo by MOD_SHOTGUN\r\n")
        assert event.cause == "MOD_SHOTGUN"

    def test_malformed_kill_line(self):
        """Test kill-looking lines that fail the pattern."""
        assert classify_line("  2:11 Kill: 2 4 10: Isgalamido killed Dono da Bola") == Unrecognized(malformed=True)
        assert classify_line("  2:11 Kill: x y z: Isgalamido killed Zeh by MOD_GAUNTLET").malformed
        assert parse_kill("  2:11 Kill: 2 4 10: Isgalamido killed Dono da Bola") is None

    def test_unrecognized_lines(self):
        """Test irrelevant lines are ignored without a diagnostic."""
        for line in ["", "  0:25 ClientConnect: 2", "  0:30 Item: 2 weapon_rocketlauncher",
                     "  1:47 Exit: Timelimit hit."]:
            event = classify_line(line)
            assert event == Unrecognized()
            assert not event.malformed

    def test_markers_take_precedence(self):
        """Test the start marker wins over anything else on the line."""
        assert classify_line("  0:00 InitGame: Kill: 1 2 3: a killed b by c") == MatchStart()

    def test_pattern_requires_numeric_fields(self):
        """Test the three numeric fields are required."""
        assert KILL_PATTERN.match("  1:00 Kill: 1 2: a killed b by c") is None
        assert KILL_PATTERN.match("  1:00 Kill: 1 2 3: a killed b by c") is not None


if __name__ == "__main__":
    unittest.main()
