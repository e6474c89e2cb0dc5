"""
Reading point records from text.

Format::

    # comment
    4
    A 0.5 0.5
    B 5.5 0.5
    C 5.5 5.5
    D 0.5 5.5

The first meaningful line holds the record count, each following line one
``label x y`` record. Blank lines and ``#`` comments are ignored. Any
deviation raises InputError; no partial list is ever returned.
"""

import io
import math
from pathlib import Path
from typing import Iterable, List, TextIO, Tuple, Union

from .errors import InputError
from .logger import get_logger
from .nodes import Point

__all__ = ["MAX_LABEL_LENGTH", "parse_points", "read_points", "write_points"]

MAX_LABEL_LENGTH = 64

logger = get_logger(__name__)


def _meaningful_lines(lines: Iterable[str]) -> Iterable[Tuple[int, str]]:
    for number, line in enumerate(lines, start=1):
        line = line.strip()
        if line and not line.startswith("#"):
            yield number, line


def _parse_count(number: int, line: str) -> int:
    try:
        count = int(line)
    except ValueError:
        raise InputError(f"invalid record count {line!r}", number) from None
    if count < 1:
        raise InputError(f"record count must be at least 1, got {count}", number)
    return count


def _check_label(label: str, number: int = None) -> None:
    if not label or any(c.isspace() for c in label):
        raise InputError(f"label {label!r} must be non-empty without whitespace", number)
    if label.startswith("#"):
        raise InputError(f"label {label!r} must not start with '#'", number)
    if len(label) > MAX_LABEL_LENGTH:
        raise InputError(f"label longer than {MAX_LABEL_LENGTH} characters", number)


def _parse_record(number: int, line: str) -> Point:
    fields = line.split()
    if len(fields) != 3:
        raise InputError(f"expected 'label x y', got {len(fields)} fields", number)
    label, x, y = fields
    _check_label(label, number)
    try:
        point = Point(label, float(x), float(y))
    except ValueError:
        raise InputError(f"invalid coordinates {x!r} {y!r}", number) from None
    if not (math.isfinite(point.x) and math.isfinite(point.y)):
        raise InputError("coordinates must be finite", number)
    return point


def parse_points(lines: Iterable[str]) -> List[Point]:
    """
    Parse a record count followed by that many records.

    @param lines: iterable of text lines
    @return: list of Point in input order
    @raises InputError: on a malformed count or record, or a count mismatch
    """
    records = _meaningful_lines(lines)
    try:
        number, line = next(records)
    except StopIteration:
        raise InputError("missing record count") from None
    count = _parse_count(number, line)

    points: List[Point] = []
    for number, line in records:
        if len(points) == count:
            raise InputError(f"more records than the declared {count}", number)
        points.append(_parse_record(number, line))
    if len(points) != count:
        raise InputError(f"expected {count} records, found {len(points)}")
    return points


def read_points(source: Union[str, Path, TextIO]) -> List[Point]:
    """
    Read points from a file path or an open text stream.

    @param source: path, or file-like object with text lines
    @return: list of Point
    """
    if isinstance(source, (str, Path)):
        path = Path(source)
        logger.debug(f"Reading points from {path}")
        data = path.read_bytes()
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            line = data.count(b"\n", 0, exc.start) + 1
            logger.error(f"{path}: line {line} is not valid UTF-8")
            raise InputError("not valid UTF-8", line) from exc
        try:
            points = parse_points(text.splitlines())
        except InputError as exc:
            logger.error(f"{path}: {exc}")
            raise
    else:
        points = parse_points(source)
    logger.info(f"Read {len(points)} points")
    return points


def write_points(points: Iterable[Point], target: Union[str, Path, TextIO]) -> None:
    """
    Write points in the format read_points accepts.

    Every record is checked first; nothing is written if one would not read back.

    @raises InputError: on a label or coordinate read_points would reject
    """
    points = list(points)
    if not points:
        raise InputError("at least one point is required")
    for number, p in enumerate(points, start=2):
        _check_label(p.label, number)
        if not (math.isfinite(p.x) and math.isfinite(p.y)):
            raise InputError("coordinates must be finite", number)
    buffer = io.StringIO()
    buffer.write(f"{len(points)}\n")
    for p in points:
        buffer.write(f"{p.label} {p.x!r} {p.y!r}\n")
    if isinstance(target, (str, Path)):
        Path(target).write_text(buffer.getvalue(), encoding="utf-8")
    else:
        target.write(buffer.getvalue())
