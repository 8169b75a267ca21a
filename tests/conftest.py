import os
import sys

import pytest

# Add the 'src' directory to the Python path so the 'fsgate' package is
# importable without installing it.
added_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '../src'))
sys.path.insert(0, added_path)

from fsgate.utils import config_manager  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path_factory, monkeypatch):
    """Run each test with a throwaway $HOME, working directory and configuration."""
    home = tmp_path_factory.mktemp("home")
    work = tmp_path_factory.mktemp("work")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    for name in list(os.environ):
        if name.startswith("FSGATE_"):
            monkeypatch.delenv(name)

    config_manager.ConfigurationManager._instance = None
    config_manager._config_manager = None
    yield home
    config_manager.ConfigurationManager._instance = None
    config_manager._config_manager = None


@pytest.fixture
def fake_home(isolated_environment):
    """The temporary directory installed as $HOME."""
    return isolated_environment
