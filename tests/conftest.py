"""Configuration for pytest."""
import os
import tempfile
import pytest
from pathlib import Path

from quake_log_parser.config.config import ParserConfig


SAMPLE_LOG_LINES = [
    "  0:00 ------------------------------------------------------------",
    r"  0:00 InitGame: \sv_floodProtect\1\sv_maxPing\0\sv_minPing\0\sv_maxRate\10000\mapname\q3dm17",
    "  0:25 ClientConnect: 2",
    r"  0:25 ClientUserinfoChanged: 2 n\Isgalamido\t\0\model\uriel/zael",
    "  0:30 Item: 2 weapon_rocketlauncher",
    "  0:54 Kill: 1022 2 22: <world> killed Isgalamido by MOD_TRIGGER_HURT",
    "  1:07 Kill: 1022 2 22: <world> killed Isgalamido by MOD_TRIGGER_HURT",
    "  1:42 Kill: 2 3 6: Isgalamido killed Mocinha by MOD_ROCKET_SPLASH",
    "  1:47 Exit: Timelimit hit.",
    "  1:47 ShutdownGame:",
    "  1:47 ------------------------------------------------------------",
    r"  0:00 InitGame: \capturelimit\8\g_maxGameClients\0\mapname\q3dm17",
    "  0:12 Kill: 1022 4 19: <world> killed Dono da Bola by MOD_FALLING",
    "  0:19 Kill: 2 4 10: Isgalamido killed Dono da Bola by MOD_RAILGUN",
    "  0:21 Kill: 2 4 10: Isgalamido killed Dono da Bola",
]


@pytest.fixture
def test_data_dir():
    """Create a temporary directory for test data."""
    temp_dir = tempfile.TemporaryDirectory()
    yield Path(temp_dir.name)
    temp_dir.cleanup()


@pytest.fixture
def parser_config(test_data_dir):
    """Parser configuration writing into the temporary directory."""
    return ParserConfig(
        report_path=str(test_data_dir / "quake_report.json"),
        show_progress=False,
    )


@pytest.fixture
def sample_log_lines():
    """Two matches: one closed by ShutdownGame, one cut off at end of file."""
    return list(SAMPLE_LOG_LINES)


@pytest.fixture
def sample_log_file():
    """Create a sample game log file for testing."""
    fd, path = tempfile.mkstemp(suffix='.log')

    with os.fdopen(fd, 'w', encoding='utf-8') as f:
        for line in SAMPLE_LOG_LINES:
            f.write(line + "\n")

    yield path

    # Clean up
    os.unlink(path)


@pytest.fixture
def empty_log_file(test_data_dir):
    """A log without any InitGame line."""
    path = test_data_dir / "empty.log"
    path.write_text("  0:54 Kill: 1022 2 22: <world> killed Isgalamido by MOD_TRIGGER_HURT\n", encoding='utf-8')
    return str(path)
