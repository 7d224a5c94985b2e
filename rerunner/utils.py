import os
from pathlib import Path


def is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


def qualify_command(path: str) -> str:
    """Prefix a bare file name with ./ so it is never looked up on PATH."""
    if os.path.basename(path) == path:
        return os.path.join(os.curdir, path)
    return path
