" generic fixtures "
import logging

import pytest

from aerospace_utils.options import GlobalOptions

CONFIG_TEMPLATE = """# Managed by hand, gaps by aerospace-utils
start-at-login = true

[gaps]
inner.horizontal = 10
inner.vertical = 10
outer.top = 8
outer.bottom = [{ monitor.main = 8 }, 12]
# per monitor side gaps
outer.left = [{ monitor.main = 100 }, { monitor."DELL U2722D" = 200 }, 24]
outer.right = [{ monitor.main = 100 }, { monitor."DELL U2722D" = 200 }, 24]

[mode.main.binding]
alt-h = "focus left"
"""


def pytest_configure():
    "Runs once before all"
    from aerospace_utils.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


@pytest.fixture
def test_log():
    """Provide a silent logger for tests."""
    logger = logging.getLogger("test_aerospace_utils")
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())
    logger.propagate = False
    return logger


@pytest.fixture
def config_file(tmp_path):
    "An aerospace.toml with gaps for `main` and a DELL monitor"
    path = tmp_path / "aerospace.toml"
    path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
    return path


@pytest.fixture
def state_file(tmp_path):
    "Location of the state file (not created)"
    return tmp_path / "state" / "aerospace-utils-state.toml"


@pytest.fixture
def options(config_file, state_file):
    "Options for a 1920px wide main monitor, without reload"
    return GlobalOptions(
        config_path=config_file,
        state_path=state_file,
        monitor_width=1920,
        no_reload=True,
        no_color=True,
    )
