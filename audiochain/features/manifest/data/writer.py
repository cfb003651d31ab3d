from pathlib import Path
from typing import Iterable


def quote_location(location: Path) -> str:
    """
    Single-quotes a path for the concat demuxer.
    A literal quote closes the string, is escaped, and reopens it: ' -> '\\''
    """
    text = str(Path(location).absolute())
    return "'" + text.replace("'", "'\\''") + "'"


def render_manifest(locations: Iterable[Path]) -> str:
    """One `file '<path>'` line per input, in concatenation order."""
    return "".join(f"file {quote_location(location)}\n" for location in locations)


def write_manifest(target: Path, locations: Iterable[Path]) -> Path:
    with open(target, "w", encoding="utf-8") as f:
        f.write(render_manifest(locations))
    return target
