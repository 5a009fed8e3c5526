"""Path display helpers."""

from pathlib import Path
from typing import Optional


def format_display_path(file_path: Path, cwd: Optional[Path] = None, home: Optional[Path] = None) -> str:
    """
    Shorten a storage path for the status line.

    Paths inside the working directory are shown relative to it, paths inside
    the home directory are shown with a leading "~", anything else is shown
    as-is.

    Args:
        file_path: Absolute path of the storage file
        cwd: Working directory (defaults to Path.cwd())
        home: Home directory (defaults to Path.home())

    Returns:
        Display string for the path
    """
    file_path = Path(file_path)
    cwd = Path.cwd() if cwd is None else Path(cwd)
    home = Path.home() if home is None else Path(home)

    try:
        return str(file_path.relative_to(cwd))
    except ValueError:
        pass

    try:
        rel = file_path.relative_to(home)
    except ValueError:
        return str(file_path)
    return "~" if str(rel) == "." else f"~/{rel.as_posix()}"
