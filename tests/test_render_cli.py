"""
Rendering and command-line tests.
"""
import json

from hexkudo.app.main import main
from hexkudo.core.puzzle import Puzzle
from hexkudo.render.puzzle_render import PuzzleRenderer, render_puzzle


def test_render_png(tmp_path, ring_puzzle):
    out = tmp_path / "ring.png"
    assert render_puzzle(ring_puzzle, str(out), show_solution=True) == str(out)
    assert out.stat().st_size > 0


def test_render_blocked_cells_and_links(tmp_path):
    from hexkudo.app.engine import new_puzzle
    from hexkudo.config import BuilderConfig, EngineConfig
    puzzle = new_puzzle("classic", 2, "easy", seed=5,
                        config=EngineConfig(builder=BuilderConfig(use_links=True)))
    out = tmp_path / "classic.svg"
    render_puzzle(puzzle, str(out), title="classic")
    assert out.read_text().startswith("<?xml")


def test_centers_follow_axial_layout():
    renderer = PuzzleRenderer(radius=10)
    x0, y0 = renderer.center_of((0, 0))
    x1, y1 = renderer.center_of((1, 0))
    x2, y2 = renderer.center_of((0, 1))
    assert y1 == y0 and x1 > x0
    assert y2 > y0 and abs(x2 - (x0 + x1) / 2) < 1e-9


def test_cli_generate_solve_render(tmp_path, capsys):
    puzzle_file = tmp_path / "p.json"
    assert main(["generate", "--shape", "hexagon", "--size", "2", "--seed", "42",
                 "--out", str(puzzle_file)]) == 0
    puzzle = Puzzle.load(str(puzzle_file))
    assert puzzle.seed == 42

    capsys.readouterr()
    assert main(["solve", str(puzzle_file)]) == 0
    report = json.loads(capsys.readouterr().out)
    assert report["status"] == "unique"
    assert report["matches_stored_solution"] is True

    image = tmp_path / "p.png"
    assert main(["render", str(puzzle_file), "--out", str(image), "--solution"]) == 0
    assert image.exists()


def test_cli_shapes(capsys):
    assert main(["shapes", "--size", "2"]) == 0
    out = capsys.readouterr().out
    assert "hexagon" in out and "19 cells" in out


def test_cli_reports_errors(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{}")
    assert main(["solve", str(bad)]) == 1
    assert main([]) == 2
