"""Pytest configuration and shared fixtures."""

import io
import sys
from pathlib import Path

import pytest
from rich.console import Console

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from taskbot_cli.config import ConfigModel
from taskbot_cli.domain import TaskList
from taskbot_cli.parser import CommandParser
from taskbot_cli.storage import Storage
from taskbot_cli.ui import Ui


@pytest.fixture
def config(tmp_path):
    """Configuration rooted in a temporary data directory."""
    return ConfigModel(data_dir=str(tmp_path), backup_dir=str(tmp_path / "backups"))


@pytest.fixture
def ui():
    """UI writing to an in-memory console."""
    return Ui(console=Console(file=io.StringIO(), width=120, no_color=True))


@pytest.fixture
def storage(config):
    return Storage.from_config(config)


@pytest.fixture
def parser(config, storage, ui):
    """Command parser over an empty task list."""
    return CommandParser(TaskList(), storage, ui, config)
