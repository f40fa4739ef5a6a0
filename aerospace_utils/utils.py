"""File utilities."""

__all__ = ["expand_path", "read_text", "write_atomic"]

import contextlib
import os
from pathlib import Path

import aiofiles
import aiofiles.os
import aiofiles.tempfile


def expand_path(path: str | Path) -> Path:
    """Expand environment variables and `~` in a path."""
    return Path(os.path.expandvars(str(path))).expanduser()


async def read_text(path: Path) -> str | None:
    """Read a text file, returning None if it does not exist."""
    if not await aiofiles.os.path.exists(path):
        return None
    async with aiofiles.open(path, encoding="utf-8") as f:
        return await f.read()


async def write_atomic(path: Path, content: str) -> None:
    """Write `content` to `path` atomically.

    The content goes to a temporary file in the same directory which is then
    renamed over `path`, so a failure leaves the previous file untouched.

    Raises:
        OSError: if the directory, the temporary file or the rename fails
    """
    directory = path.parent
    await aiofiles.os.makedirs(directory, exist_ok=True)

    async with aiofiles.tempfile.NamedTemporaryFile("w", encoding="utf-8", dir=directory, prefix=".tmp-", delete=False) as tmp:
        tmp_path = Path(tmp.name)
        try:
            await tmp.write(content)
        except OSError:
            await tmp.close()
            with contextlib.suppress(FileNotFoundError):
                await aiofiles.os.remove(tmp_path)
            raise

    try:
        await aiofiles.os.replace(tmp_path, path)
    except OSError:
        with contextlib.suppress(FileNotFoundError):
            await aiofiles.os.remove(tmp_path)
        raise
