"""File store used by the scaffold engine.

The engine only needs a handful of filesystem primitives. They are gathered
behind the ``FileStore`` protocol so tests and alternative back ends can
substitute their own. ``LocalFileStore`` runs each blocking call in a worker
thread; callers await them one at a time.
"""

from __future__ import annotations

import asyncio
import shutil
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True)
class DirEntry:
    name: str
    is_dir: bool


class FileStore(Protocol):
    async def exists(self, path: Path) -> bool: ...

    async def ensure_dir(self, path: Path) -> None: ...

    async def read_dir_entries(self, path: Path) -> list[DirEntry]: ...

    async def read_text(self, path: Path) -> str: ...

    async def write_text(self, path: Path, content: str) -> None: ...

    async def read_bytes(self, path: Path) -> bytes: ...

    async def write_bytes(self, path: Path, content: bytes) -> None: ...

    async def set_executable(self, path: Path) -> None: ...

    async def remove_tree(self, path: Path) -> None: ...


class LocalFileStore:
    """``FileStore`` backed by the local filesystem."""

    async def exists(self, path: Path) -> bool:
        return await asyncio.to_thread(Path(path).exists)

    async def ensure_dir(self, path: Path) -> None:
        await asyncio.to_thread(Path(path).mkdir, parents=True, exist_ok=True)

    async def read_dir_entries(self, path: Path) -> list[DirEntry]:
        return await asyncio.to_thread(_list_entries, Path(path))

    async def read_text(self, path: Path) -> str:
        return await asyncio.to_thread(_read_text, Path(path))

    async def write_text(self, path: Path, content: str) -> None:
        await asyncio.to_thread(_write_text, Path(path), content)

    async def read_bytes(self, path: Path) -> bytes:
        return await asyncio.to_thread(Path(path).read_bytes)

    async def write_bytes(self, path: Path, content: bytes) -> None:
        await asyncio.to_thread(Path(path).write_bytes, content)

    async def set_executable(self, path: Path) -> None:
        await asyncio.to_thread(_make_executable, Path(path))

    async def remove_tree(self, path: Path) -> None:
        await asyncio.to_thread(shutil.rmtree, Path(path))


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _list_entries(path: Path) -> list[DirEntry]:
    return [DirEntry(name=p.name, is_dir=p.is_dir()) for p in path.iterdir()]


def _read_text(path: Path) -> str:
    with path.open("r", encoding="utf-8", newline="") as fh:
        return fh.read()


def _write_text(path: Path, content: str) -> None:
    with path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(content)


def _make_executable(path: Path) -> None:
    """Set rwxr-xr-x on a file."""
    path.chmod(
        stat.S_IRWXU | stat.S_IRGRP | stat.S_IXGRP | stat.S_IROTH | stat.S_IXOTH
    )
