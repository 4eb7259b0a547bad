"""
Source discovery and reading.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from kinship.core.exceptions import SourceReadError
from kinship.core.logging import logger


@dataclass(frozen=True)
class SourceUnit:
    """One unit of source text and where it came from."""

    origin: str
    text: str


def expand_paths(paths: Iterable[str], extensions: Sequence[str]) -> List[Path]:
    """
    Files named by ``paths``.

    A directory expands recursively to every file with one of ``extensions``;
    a file is taken as given, whatever its extension.

    Raises:
        SourceReadError: a path does not exist
    """
    suffixes = {extension.lower() for extension in extensions}
    files: List[Path] = []

    for raw_path in paths:
        path = Path(raw_path)
        if path.is_dir():
            found = sorted(
                candidate
                for candidate in path.rglob("*")
                if candidate.is_file() and candidate.suffix.lower() in suffixes
            )
            logger.debug("Expanded directory", path=str(path), files=len(found))
            files.extend(found)
        elif path.is_file():
            files.append(path)
        else:
            error = SourceReadError(f"Path not found: {path}", context={"path": str(path)})
            error.add_suggestion("Check the path, it must be a file or a directory")
            raise error

    return files


def read_source(path: Path, encoding: str = "utf-8") -> SourceUnit:
    """
    Read one file.

    Raises:
        SourceReadError: the file cannot be read or decoded
    """
    try:
        return SourceUnit(origin=str(path), text=path.read_text(encoding=encoding))
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Could not read source", path=str(path), error=str(e))
        raise SourceReadError(
            f"Could not read {path}: {e}", context={"path": str(path)}, cause=e
        ) from e


def read_sources(paths: Iterable[Path], encoding: str = "utf-8") -> Iterator[SourceUnit]:
    """Lazily read every path."""
    for path in paths:
        yield read_source(path, encoding)
