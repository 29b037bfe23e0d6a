import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from crawler import logging_utils  # noqa: E402
from crawler.dungeon import DungeonConfig  # noqa: E402


@pytest.fixture
def small_config():
    """10x10 grid with the default clearances, used by hand-built router scenarios."""
    return DungeonConfig(width=10, height=10, max_room_width=5, max_room_height=5)


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    """Keep generation summaries out of captured output unless a test opts in."""
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["warn"])
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)


def pytest_configure(config):  # register custom markers
    config.addinivalue_line("markers", "structure: layout invariant sweeps over several seeds")
    config.addinivalue_line("markers", "performance: coarse generation timing guardrails")
