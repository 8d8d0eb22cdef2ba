import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from mazegen import logging_utils  # noqa: E402
from mazegen.maze.config import MapConfig  # noqa: E402


@pytest.fixture(autouse=True)
def _default_log_level(monkeypatch):
    """Pin logging to info/text so capsys assertions don't depend on the environment."""
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    yield


@pytest.fixture
def small_config():
    """12x13 map from the reference scenario."""
    return MapConfig(
        width=12,
        height=13,
        path_min=10,
        path_max=60,
        teleporter_min=1,
        teleporter_max=1,
        manager_min=2,
        manager_max=2,
        turn_min=2,
        turn_max=4,
        max_attempts=500,
    )
