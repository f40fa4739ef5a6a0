"""Tests for the per-monitor state store."""

import tomllib
from pathlib import Path

import pytest
from pytest_asyncio import fixture

from aerospace_utils.models import InvalidPercentage, MonitorState, StateFileError, UnrecognizedStateFormat
from aerospace_utils.state import WorkspaceState, parse_state

PATH = Path("/tmp/state.toml")


class TestParseState:
    """Supported layouts and migrations."""

    def test_empty(self):
        assert parse_state("", PATH) == ({}, False)
        assert parse_state("  \n", PATH) == ({}, False)

    def test_current_layout(self):
        content = """
[monitors.main]
current = 60
default = 50
shift = -5

[monitors."DELL U2722D"]
current = 80
"""
        monitors, migrated = parse_state(content, PATH)
        assert not migrated
        assert monitors["main"] == MonitorState(current=60, default=50, shift=-5)
        assert monitors["DELL U2722D"] == MonitorState(current=80)

    def test_bare_integer(self):
        monitors, migrated = parse_state("75\n", PATH)
        assert migrated
        assert monitors == {"main": MonitorState(current=75, default=75)}

    def test_legacy_workspace_table(self):
        monitors, migrated = parse_state("[workspace]\ncurrent = 40\ndefault = 60\n", PATH)
        assert migrated
        assert monitors == {"main": MonitorState(current=40, default=60)}

    @pytest.mark.parametrize(
        "content",
        [
            "not toml at all [",
            "[other]\nvalue = 1\n",
            "[monitors.main]\ncurrent = 'sixty'\n",
            "[monitors.main]\nwidth = 1920\n",
            "[monitors.main]\ncurrent = true\n",
            "monitors = 3\n",
            "[workspace]\ncurrent = 1\n[monitors.main]\ncurrent = 2\n",
        ],
    )
    def test_unrecognized(self, content):
        with pytest.raises(UnrecognizedStateFormat) as exc:
            parse_state(content, PATH)
        assert str(PATH) in str(exc.value)


@fixture
async def loaded_state(state_file):
    "An empty, loaded state"
    state = WorkspaceState(state_file)
    await state.load()
    return state


class TestResolvePercentage:
    """Priority: explicit, initial value, current, default."""

    @pytest.mark.asyncio
    async def test_initial_value_on_empty_store(self, loaded_state):
        assert loaded_state.resolve_percentage("main") == 60
        assert loaded_state.resolve_percentage("anything") == 60
        assert not loaded_state.monitors

    @pytest.mark.asyncio
    async def test_explicit_wins(self, loaded_state):
        loaded_state.update_current("main", 70)
        assert loaded_state.resolve_percentage("main", 30) == 30
        # returned as-is, validation is the caller's job
        assert loaded_state.resolve_percentage("main", 150) == 150

    @pytest.mark.asyncio
    async def test_current_then_default(self, loaded_state):
        loaded_state.get_monitor_state("main").default = 55
        assert loaded_state.resolve_percentage("main") == 55
        loaded_state.get_monitor_state("main").current = 65
        assert loaded_state.resolve_percentage("main") == 65

    @pytest.mark.asyncio
    async def test_unknown_monitor(self, loaded_state):
        loaded_state.update_current("main", 70)
        assert loaded_state.resolve_percentage("HDMI-1") is None
        assert "HDMI-1" not in loaded_state.monitors

    @pytest.mark.asyncio
    async def test_monitor_without_values(self, loaded_state):
        loaded_state.update_current("main", 70)
        loaded_state.set_shift("HDMI-1", 3)
        assert loaded_state.resolve_percentage("HDMI-1") is None


class TestUpdates:
    """Mutations of the in-memory state."""

    @pytest.mark.asyncio
    async def test_first_update_sets_default(self, loaded_state):
        loaded_state.update_current("main", 70)
        assert loaded_state.monitors["main"] == MonitorState(current=70, default=70)

    @pytest.mark.asyncio
    async def test_default_is_sticky(self, loaded_state):
        loaded_state.update_current("main", 70)
        loaded_state.update_current("main", 40)
        assert loaded_state.monitors["main"] == MonitorState(current=40, default=70)

    @pytest.mark.asyncio
    async def test_also_set_default(self, loaded_state):
        loaded_state.update_current("main", 70)
        loaded_state.update_current("main", 40, also_set_default=True)
        assert loaded_state.monitors["main"] == MonitorState(current=40, default=40)

    @pytest.mark.asyncio
    async def test_invalid_update(self, loaded_state):
        with pytest.raises(InvalidPercentage):
            loaded_state.update_current("main", 0)
        assert loaded_state.resolve_percentage("main") == 60

    @pytest.mark.asyncio
    async def test_shift(self, loaded_state):
        assert loaded_state.get_shift("main") == 0
        loaded_state.set_shift("main", -7)
        assert loaded_state.get_shift("main") == -7
        loaded_state.set_shift("main", 0)
        assert loaded_state.monitors["main"].shift is None


class TestPersistence:
    """Loading and saving the file."""

    @pytest.mark.asyncio
    async def test_missing_file_is_empty(self, state_file):
        state = WorkspaceState(state_file)
        assert not state.exists()
        await state.load()
        assert state.monitors == {}

    @pytest.mark.asyncio
    async def test_save_and_reload(self, state_file):
        state = WorkspaceState(state_file)
        await state.load()
        state.update_current("main", 65)
        state.set_shift("main", 4)
        state.update_current("DELL U2722D", 80)
        await state.save()

        assert state_file.exists()
        data = tomllib.loads(state_file.read_text())
        assert data == {
            "monitors": {
                "main": {"current": 65, "default": 65, "shift": 4},
                "DELL U2722D": {"current": 80, "default": 80},
            }
        }

        reloaded = WorkspaceState(state_file)
        await reloaded.load()
        assert reloaded.monitors == state.monitors

    @pytest.mark.asyncio
    async def test_empty_records_not_written(self, state_file):
        state = WorkspaceState(state_file)
        await state.load()
        state.update_current("main", 50)
        state.get_monitor_state("HDMI-1")
        await state.save()
        assert "HDMI-1" not in state_file.read_text()

    @pytest.mark.asyncio
    async def test_legacy_migrated_on_save(self, state_file):
        state_file.parent.mkdir(parents=True)
        state_file.write_text("[workspace]\ncurrent = 40\ndefault = 60\n")

        state = WorkspaceState(state_file)
        await state.load()
        assert state.migrated
        await state.save()
        assert not state.migrated

        data = tomllib.loads(state_file.read_text())
        assert data == {"monitors": {"main": {"current": 40, "default": 60}}}

    @pytest.mark.asyncio
    async def test_no_temporary_file_left(self, state_file):
        state = WorkspaceState(state_file)
        await state.load()
        state.update_current("main", 50)
        await state.save()
        assert [p.name for p in state_file.parent.iterdir()] == [state_file.name]

    @pytest.mark.asyncio
    async def test_unreadable_format(self, state_file):
        state_file.parent.mkdir(parents=True)
        state_file.write_text("[something]\nelse = 1\n")
        state = WorkspaceState(state_file)
        with pytest.raises(StateFileError):
            await state.load()

    @pytest.mark.asyncio
    async def test_write_failure(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        state = WorkspaceState(blocker / "state.toml")
        await state.load()
        state.update_current("main", 50)
        with pytest.raises(StateFileError):
            await state.save()
