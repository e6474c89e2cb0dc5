import pytest

from agglomerate.cli import build_parser, main

SQUARE = "4\nA 0.5 0.5\nB 5.5 0.5\nC 5.5 5.5\nD 0.5 5.5\n"


@pytest.fixture
def square_file(tmp_path):
    path = tmp_path / "square.txt"
    path.write_text(SQUARE)
    return path


def test_main_prints_tree_and_cuts(square_file, capsys):
    assert main([str(square_file), "-k", "2", "-k", "3"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out[0] == "0 leaf h=0 c=(0.5, 0.5) [A]"
    assert out[6] == "6 merge h=2 c=(3, 3) d=5 [D C B A]"
    assert out[7:10] == ["2 clusters:", "  1: D C", "  2: B A"]
    assert out[10] == "3 clusters:"


def test_main_with_config(square_file, tmp_path, capsys):
    config = tmp_path / "agglomerate.yml"
    config.write_text("linkage: complete\ncuts: [2]\nlive_only: true\n")

    assert main([str(square_file), "-c", str(config)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[6] == "6 merge h=2 c=(3, 3) d=7.07107 [D C B A]"
    assert "->" not in "".join(out)
    assert out[7] == "2 clusters:"


def test_main_reports_bad_input(tmp_path, capsys):
    path = tmp_path / "bad.txt"
    path.write_text("3\nA 0 0\n")

    assert main([str(path)]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "InputError" in captured.err


def test_main_reports_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.txt")]) == 1
    assert "FileNotFoundError" in capsys.readouterr().err


def test_main_plot(square_file, monkeypatch):
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    shown = []
    monkeypatch.setattr(plt, "show", lambda: shown.append(True))
    assert main([str(square_file), "-k", "2", "--plot"]) == 0
    assert shown == [True]
    plt.close("all")


def test_parser_rejects_unknown_linkage():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["points.txt", "-l", "ward"])


def test_main_reports_non_utf8_input(tmp_path, capsys):
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"1\n\xff\xfe 0 0\n")

    assert main([str(path)]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "InputError" in captured.err


def test_main_plot_with_zero_cut(square_file, monkeypatch, capsys):
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    shown = []
    monkeypatch.setattr(plt, "show", lambda: shown.append(True))
    assert main([str(square_file), "-k", "0", "--plot"]) == 0
    assert shown == [True]
    assert "0 clusters:" in capsys.readouterr().out
    plt.close("all")
