"""Content discovery: recursive walk for markdown post files"""

from pathlib import Path


MD_EXTENSION = ".md"


def discover_files(root: Path) -> list[str]:
    """Return relative POSIX paths of every .md file under root, depth-first.

    Entries are visited in name order at each level so the result does not
    depend on filesystem listing order.
    """
    root = Path(root)
    if not root.exists():
        raise FileNotFoundError(f"Blog content directory not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Blog content path is not a directory: {root}")

    found: list[str] = []

    def _scan(directory: Path) -> None:
        for entry in sorted(directory.iterdir(), key=lambda p: p.name):
            if entry.is_dir():
                _scan(entry)
            elif entry.is_file() and entry.name.endswith(MD_EXTENSION):
                found.append(entry.relative_to(root).as_posix())

    _scan(root)
    return found
