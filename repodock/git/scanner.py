# Repodock Repository Scanner
# Discover git working copies one level below a root directory

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

GIT_MARKER = ".git"


class ScanError(Exception):
    """Raised when the directory to scan cannot be listed."""

    def __init__(self, path: Path, message: Optional[str] = None):
        self.path = path
        self.message = message or f"cannot list {path}"
        super().__init__(self.message)


class NotFoundError(ScanError):
    """Raised when the directory to scan does not exist."""

    def __init__(self, path: Path):
        super().__init__(path, f"Directory not found: {path}")


@dataclass(frozen=True)
class WorkingCopy:
    """A git checkout found on disk."""

    path: Path
    name: str

    @property
    def marker(self) -> Path:
        """Path to the ``.git`` metadata entry."""
        return self.path / GIT_MARKER


def is_working_copy(path: Path) -> bool:
    """
    Check if ``path`` is a directory directly containing ``.git``.

    An entry that cannot be inspected (e.g. permission denied) is not a
    working copy.
    """
    try:
        return path.is_dir() and (path / GIT_MARKER).exists()
    except OSError:
        return False


def scan_directory(root: Path) -> list[WorkingCopy]:
    """
    Scan a directory for git working copies.

    Only immediate subdirectories are considered; a subdirectory qualifies
    when it directly contains a ``.git`` entry. Subdirectories that cannot
    be inspected are skipped. Results are sorted by entry name so the order
    does not depend on the filesystem.

    Args:
        root: Directory to scan.

    Returns:
        List of working copies, empty if none qualify.

    Raises:
        NotFoundError: If ``root`` does not exist or is not a directory.
        ScanError: If ``root`` cannot be listed.
    """
    root = Path(root)
    try:
        if not root.is_dir():
            raise NotFoundError(root)
        children = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise ScanError(root, f"{root}: {e.strerror or e}")

    working_copies: list[WorkingCopy] = []

    for child in children:
        if is_working_copy(child):
            working_copies.append(WorkingCopy(path=child, name=child.name))

    return working_copies


def working_copy_from_path(path: Path, name: Optional[str] = None) -> WorkingCopy:
    """
    Build a working copy for an explicitly configured path.

    Args:
        path: Repository path (``~`` is expanded).
        name: Display name, defaults to the final path segment.

    Returns:
        WorkingCopy for the path. The path is not checked.
    """
    path = Path(path).expanduser()
    return WorkingCopy(path=path, name=name or path.name)
