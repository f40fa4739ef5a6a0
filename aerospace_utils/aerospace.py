"""Interaction with the aerospace binary."""

__all__ = ["AerospaceBinary"]

import asyncio
import os
import shutil
from logging import Logger
from pathlib import Path
from typing import Self

from .constants import AEROSPACE_BINARY
from .models import AerospaceNotFound, ReloadError


class AerospaceBinary:
    """The aerospace CLI."""

    def __init__(self, path: Path) -> None:
        self.path = path

    @classmethod
    def find(cls, name: str = AEROSPACE_BINARY) -> Self:
        """Locate the executable in PATH.

        Raises:
            AerospaceNotFound: if it is missing or not executable
        """
        found = shutil.which(name)
        if found is None:
            msg = f"{name} binary not found in PATH"
            raise AerospaceNotFound(msg)
        path = Path(found)
        if not os.access(path, os.X_OK):
            msg = f"{name} at {path} is not executable"
            raise AerospaceNotFound(msg)
        return cls(path)

    async def reload_config(self, *, log: Logger) -> None:
        """Run `aerospace reload-config` and wait for it.

        Raises:
            ReloadError: if the command can't run or exits with an error
        """
        log.debug("Running %s reload-config", self.path)
        try:
            proc = await asyncio.create_subprocess_exec(
                str(self.path),
                "reload-config",
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
            output, _ = await proc.communicate()
        except OSError as e:
            msg = f"aerospace reload-config failed: {e}"
            raise ReloadError(msg) from e

        if proc.returncode != 0:
            details = output.decode(errors="replace").strip()
            msg = f"aerospace reload-config failed: {details or f'exit code {proc.returncode}'}"
            raise ReloadError(msg)
