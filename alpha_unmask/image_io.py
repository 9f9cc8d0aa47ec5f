"""File access for input and output images."""

from pathlib import Path
from typing import Union

from .errors import FileAccessError


def read_bytes(path: Union[str, Path]) -> bytes:
    """Read a whole file.

    Raises:
        FileAccessError: If the file cannot be opened or read
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise FileAccessError(f"Could not read {path}: {e.strerror or e}", path) from e


def write_bytes(path: Union[str, Path], data: bytes) -> Path:
    """Write ``data`` to ``path``, creating parent directories.

    A failed write removes the partial file before raising.

    Raises:
        FileAccessError: If the file cannot be created or written
    """
    path = Path(path)
    opened = False
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            opened = True
            f.write(data)
    except OSError as e:
        if opened and path.is_file():
            path.unlink()
        raise FileAccessError(f"Could not write {path}: {e.strerror or e}", path) from e
    return path
