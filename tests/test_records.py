import io

import pytest

from agglomerate import InputError, Point, read_points
from agglomerate.records import MAX_LABEL_LENGTH, parse_points, write_points

SQUARE = """\
# corners of a square
4
A 0.5 0.5
B 5.5 0.5

C 5.5 5.5
D 0.5 5.5
"""


def test_parse_points(square):
    assert parse_points(SQUARE.splitlines()) == square


def test_read_points_from_path_and_stream(tmp_path, square):
    path = tmp_path / "square.txt"
    path.write_text(SQUARE)

    assert read_points(path) == square
    assert read_points(str(path)) == square
    assert read_points(io.StringIO(SQUARE)) == square


def test_write_points_is_readable(tmp_path, random_points):
    path = tmp_path / "points.txt"
    write_points(random_points, path)
    assert read_points(path) == random_points


@pytest.mark.parametrize(
    "text, line",
    [
        ("", None),
        ("# only a comment\n", None),
        ("four\nA 0 0\n", 1),
        ("0\n", 1),
        ("2\nA 0 0\n", None),
        ("1\nA 0 0\nB 1 1\n", 3),
        ("1\nA 0\n", 2),
        ("1\nA 0 0 0\n", 2),
        ("1\nA x 0\n", 2),
        ("1\nA nan 0\n", 2),
        ("1\nA 0 inf\n", 2),
        (f"1\n{'L' * (MAX_LABEL_LENGTH + 1)} 0 0\n", 2),
    ],
)
def test_malformed_input(text, line):
    with pytest.raises(InputError) as excinfo:
        parse_points(io.StringIO(text))
    assert excinfo.value.line == line


def test_label_at_max_length():
    label = "L" * MAX_LABEL_LENGTH
    assert parse_points(["1", f"{label} 1 2"]) == [Point(label, 1.0, 2.0)]


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_points(tmp_path / "missing.txt")


def test_non_utf8_file_is_input_error(tmp_path):
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"1\n\xff\xfe 0 0\n")

    with pytest.raises(InputError) as excinfo:
        read_points(path)
    assert excinfo.value.line == 2
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


@pytest.mark.parametrize(
    "label",
    ["#a", "b c", "tab\there", "", "L" * (MAX_LABEL_LENGTH + 1)],
)
def test_write_points_rejects_unreadable_labels(tmp_path, label):
    path = tmp_path / "points.txt"
    with pytest.raises(InputError) as excinfo:
        write_points([Point("ok", 0.0, 0.0), Point(label, 1.0, 1.0)], path)
    assert excinfo.value.line == 3
    assert not path.exists()


def test_write_points_rejects_non_finite_and_empty():
    out = io.StringIO()
    with pytest.raises(InputError):
        write_points([Point("a", float("nan"), 0.0)], out)
    with pytest.raises(InputError):
        write_points([], out)
    assert out.getvalue() == ""


def test_write_points_round_trip_edge_labels(square):
    points = square + [Point("L" * MAX_LABEL_LENGTH, -1e-300, 1e300), Point("a#b", 0.1, 0.2)]
    out = io.StringIO()
    write_points(points, out)
    assert parse_points(io.StringIO(out.getvalue())) == points
