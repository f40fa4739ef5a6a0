"""Tests for the aerospace binary wrapper."""

import asyncio
from pathlib import Path

import pytest

from aerospace_utils.aerospace import AerospaceBinary
from aerospace_utils.models import AerospaceNotFound, ReloadError


def _process(mocker, returncode=0, output=b""):
    proc = mocker.MagicMock()
    proc.returncode = returncode
    proc.communicate = mocker.AsyncMock(return_value=(output, None))
    return proc


class TestFind:
    """Locating the executable."""

    def test_found(self, tmp_path, monkeypatch):
        binary = tmp_path / "aerospace"
        binary.write_text("#!/bin/sh\n")
        binary.chmod(0o755)
        monkeypatch.setenv("PATH", str(tmp_path))
        assert AerospaceBinary.find().path == binary

    def test_missing(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PATH", str(tmp_path))
        with pytest.raises(AerospaceNotFound):
            AerospaceBinary.find()


class TestReload:
    """aerospace reload-config."""

    @pytest.mark.asyncio
    async def test_success(self, mocker, test_log):
        exec_mock = mocker.patch("asyncio.create_subprocess_exec", return_value=_process(mocker))
        await AerospaceBinary(Path("/usr/bin/aerospace")).reload_config(log=test_log)
        exec_mock.assert_called_once_with(
            "/usr/bin/aerospace",
            "reload-config",
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
        )

    @pytest.mark.asyncio
    async def test_failure_reports_output(self, mocker, test_log):
        mocker.patch("asyncio.create_subprocess_exec", return_value=_process(mocker, 1, b"parse error at line 3\n"))
        with pytest.raises(ReloadError, match="parse error at line 3"):
            await AerospaceBinary(Path("/usr/bin/aerospace")).reload_config(log=test_log)

    @pytest.mark.asyncio
    async def test_failure_without_output(self, mocker, test_log):
        mocker.patch("asyncio.create_subprocess_exec", return_value=_process(mocker, 2))
        with pytest.raises(ReloadError, match="exit code 2"):
            await AerospaceBinary(Path("/usr/bin/aerospace")).reload_config(log=test_log)

    @pytest.mark.asyncio
    async def test_cannot_start(self, mocker, test_log):
        mocker.patch("asyncio.create_subprocess_exec", side_effect=PermissionError("denied"))
        with pytest.raises(ReloadError, match="denied"):
            await AerospaceBinary(Path("/usr/bin/aerospace")).reload_config(log=test_log)
