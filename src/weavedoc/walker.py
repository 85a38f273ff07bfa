"""
Source discovery and reading.

Finds DataWeave files on disk, reads them, and hands their text to the
parser. Parsing one file never depends on another, so files are parsed on
a thread pool and collected back in discovery order.

Example:
    >>> sources = discover_directory(Path("src/main/resources/dwl"), "dwl")
    >>> files = parse_sources(DataWeaveParser(), sources)
"""

from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

import structlog

from weavedoc.errors import SourceNotFoundError, SourceReadError
from weavedoc.models import SourceFile
from weavedoc.parser.assembler import DataWeaveParser

logger = structlog.get_logger()


@dataclass(frozen=True)
class SourceInput:
    """A discovered file and the root its stored name is relative to."""

    root: Path
    path: Path
    file_ext: str = "dwl"

    @property
    def file_name(self) -> str:
        return self.path.as_posix()

    @property
    def root_prefix(self) -> str:
        if self.root == Path("."):
            return ""
        return self.root.as_posix()


def discover_directory(directory: Path, file_ext: str) -> Iterator[SourceInput]:
    """Yield every ``*.file_ext`` file below ``directory``.

    A missing directory, or a path that is not a directory, is logged and
    yields nothing.
    """
    directory = Path(directory)
    if not directory.exists():
        logger.warning("directory_not_found", directory=str(directory))
        return
    if not directory.is_dir():
        logger.warning("not_a_directory", directory=str(directory))
        return

    yield from _walk(directory, directory, file_ext)


def _walk(root: Path, directory: Path, file_ext: str) -> Iterator[SourceInput]:
    suffix = f".{file_ext}"
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if entry.is_file() and entry.name.endswith(suffix):
            yield SourceInput(root=root, path=entry, file_ext=file_ext)
        elif entry.is_dir():
            yield from _walk(root, entry, file_ext)


def resolve_file(base_dir: Path, name: str, file_ext: str) -> SourceInput:
    """Resolve an explicitly listed file.

    Raises:
        SourceNotFoundError: If the file does not exist
    """
    path = Path(base_dir) / name
    if not path.is_file():
        raise SourceNotFoundError(str(path))
    return SourceInput(root=Path(base_dir), path=path, file_ext=file_ext)


def read_source(path: Path) -> str:
    """Read a source file as UTF-8.

    Raises:
        SourceNotFoundError: If the file vanished
        SourceReadError: On any other I/O or decoding failure
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise SourceNotFoundError(str(path), cause=e) from e
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(str(path), cause=e) from e


def parse_source(parser: DataWeaveParser, source: SourceInput) -> SourceFile:
    """Read and parse one input."""
    text = read_source(source.path)
    parsed = parser.parse_text(
        text,
        source.file_name,
        root_dir=source.root_prefix,
        file_ext=source.file_ext,
    )
    logger.debug(
        "source_parsed",
        file=parsed.file_name,
        functions=len(parsed.functions),
        variables=len(parsed.variables),
        tables=len(parsed.tables),
    )
    return parsed


def parse_sources(
    parser: DataWeaveParser,
    sources: Iterable[SourceInput],
    max_workers: int = 4,
) -> list[SourceFile]:
    """Parse inputs concurrently, returning records in input order.

    The first read failure propagates to the caller.
    """
    sources = list(sources)
    if max_workers <= 1 or len(sources) <= 1:
        return [parse_source(parser, source) for source in sources]

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(lambda source: parse_source(parser, source), sources))
