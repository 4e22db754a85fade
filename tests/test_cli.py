"""End-to-end tests for the summarise command line."""

import numpy as np
from PIL import Image

import summarise
from colour_summary.image_io import load_visible_pixels


def _write_png(path, colours, size=(8, 8)):
    w, h = size
    arr = np.zeros((h, w, 3), dtype=np.uint8)
    flat = arr.reshape(-1, 3)
    for i in range(flat.shape[0]):
        flat[i] = colours[i % len(colours)]
    Image.fromarray(arr).save(path)
    return path


def test_single_file_writes_gather_panel(tmp_path):
    src = _write_png(tmp_path / "swatch.png", [(200, 30, 30), (30, 30, 200), (0, 0, 0)])
    out = tmp_path / "out"

    code = summarise.main([str(src), "--outdir", str(out), "--width", "300", "--height", "200"])

    assert code == 0
    with Image.open(out / "swatch_gather.png") as im:
        assert im.size == (300, 200)
    assert not (out / "swatch_lattice.png").exists()


def test_accumulation_writes_lattice_strips(tmp_path):
    src = _write_png(tmp_path / "warm.png", [(200, 100, 50)])

    code = summarise.main([str(src), "--acc", "--ng", "--levels", "2"])

    assert code == 0
    assert not (tmp_path / "warm_gather.png").exists()
    with Image.open(tmp_path / "warm_lattice.png") as im:
        arr = np.array(im)
    assert arr.shape == (202, 360, 3)


def test_missing_source(tmp_path, capsys):
    assert summarise.main([str(tmp_path / "nope.png")]) == 2
    assert "not found" in capsys.readouterr().err


def test_folder_with_unreadable_file(tmp_path, capsys):
    _write_png(tmp_path / "a.png", [(30, 200, 30)])
    (tmp_path / "b.png").write_bytes(b"definitely not a png")

    code = summarise.main([str(tmp_path), "--jobs", "2"])

    assert code == 1
    assert (tmp_path / "a_gather.png").exists()
    captured = capsys.readouterr()
    assert 'Failed to load image data for "b"' in captured.err
    assert captured.out.index("=== a.png ===") < captured.out.index("=== b.png ===")


def test_collect_images_skips_outputs(tmp_path):
    _write_png(tmp_path / "B.png", [(1, 2, 3)])
    _write_png(tmp_path / "a.png", [(1, 2, 3)])
    _write_png(tmp_path / "a_gather.png", [(1, 2, 3)])
    (tmp_path / "notes.txt").write_text("x")

    assert [p.name for p in summarise.collect_images(tmp_path)] == ["a.png", "B.png"]


def test_empty_folder_warns(tmp_path, capsys):
    assert summarise.main([str(tmp_path)]) == 0
    assert "[warn] no images" in capsys.readouterr().out


def test_debug_lines_stay_with_their_file_when_threaded(tmp_path, capsys):
    rng = np.random.default_rng(5)
    Image.fromarray(rng.integers(0, 256, size=(300, 300, 3), dtype=np.uint8)).save(tmp_path / "a.png")
    _write_png(tmp_path / "b.png", [(200, 30, 30)], size=(2, 2))

    assert summarise.main([str(tmp_path), "--jobs", "2", "--debug"]) == 0

    out = capsys.readouterr().out
    before_a, rest = out.split("=== a.png ===")
    part_a, part_b = rest.split("=== b.png ===")
    assert "[debug] Mode" not in before_a
    assert part_a.count("[debug] Mode: common") == 1
    assert part_b.count("[debug] Mode: common") == 1
    assert "Kept: 4 " in part_b


def test_write_failure_reports_and_moves_on(tmp_path, monkeypatch, capsys):
    _write_png(tmp_path / "a.png", [(30, 200, 30)])
    _write_png(tmp_path / "b.png", [(30, 200, 30)])
    real_save = summarise.save_png_rgb

    def save(path, rgb):
        if path.name.startswith("a_"):
            raise PermissionError("read-only")
        return real_save(path, rgb)

    monkeypatch.setattr(summarise, "save_png_rgb", save)

    assert summarise.main([str(tmp_path)]) == 1
    assert (tmp_path / "b_gather.png").exists()
    assert 'Failed to write "a_gather.png"' in capsys.readouterr().err


def test_transparent_pixels_are_not_loaded(tmp_path):
    arr = np.zeros((4, 4, 4), dtype=np.uint8)
    arr[0, :] = (200, 30, 30, 255)
    Image.fromarray(arr).save(tmp_path / "cut.png")

    pixels, size = load_visible_pixels(tmp_path / "cut.png")

    assert size == (4, 4)
    assert pixels.tolist() == [[200, 30, 30]] * 4
