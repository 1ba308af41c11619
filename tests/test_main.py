import json
import time
from pathlib import Path

import pytest

from partsrle.config import load_settings
from partsrle.errors import DecodeError
from partsrle import main as main_mod
from partsrle.main import _decode_all, encode_folders, list_jobs, main

from .conftest import RED, save_png

FOLDERS = ["1-bodies", "2-heads"]
PALETTE = ["", "ff0000", "0000ff", "000000", "00ff00"]


def _settings(parts_dir, tmp_path, **kw):
    return load_settings(
        env_file=tmp_path / "missing.env",
        images_dir=parts_dir, output=tmp_path / "out.json", folders=FOLDERS, **kw
    )


def test_list_jobs_strips_prefix_and_extension(parts_dir):
    jobs = list_jobs(parts_dir, FOLDERS)
    assert [(name, cat) for _, name, cat in jobs] == [
        ("body-a", "bodies"), ("body-b", "bodies"), ("head-a", "heads"),
    ]


def test_missing_folder_is_fatal(parts_dir):
    with pytest.raises(FileNotFoundError):
        list_jobs(parts_dir, ["9-nope"])


def test_encode_folders(parts_dir, tmp_path):
    enc = encode_folders(_settings(parts_dir, tmp_path))
    assert enc.palette.colors == PALETTE
    out = enc.format()
    assert list(out) == ["bodies", "heads"]
    assert [e["filename"] for e in out["bodies"]] == ["body-a", "body-b"]
    # body-a: 2x2 recorte en (1,1)
    assert out["bodies"][0]["data"] == "0x00" + "01" + "03" + "02" + "01" + "0201" + "0102" + "0100"


def test_parallel_decode_gives_same_output(parts_dir, tmp_path):
    seq = encode_folders(_settings(parts_dir, tmp_path))
    par = encode_folders(_settings(parts_dir, tmp_path, workers=4))
    assert par.data == seq.data


def test_decode_error_is_fatal(parts_dir, tmp_path):
    (parts_dir / "2-heads" / "broken.png").write_bytes(b"not a png")
    with pytest.raises(DecodeError):
        encode_folders(_settings(parts_dir, tmp_path))


def test_skip_invalid(parts_dir, tmp_path):
    (parts_dir / "2-heads" / "broken.png").write_bytes(b"not a png")
    enc = encode_folders(_settings(parts_dir, tmp_path, skip_invalid=True))
    assert len(enc) == 3


def test_seed_palette_keeps_indices(parts_dir, tmp_path):
    seed = tmp_path / "seed.json"
    seed.write_text(json.dumps({"bgcolors": [], "palette": ["", "00ff00", "0000ff"], "images": {}}))
    enc = encode_folders(_settings(parts_dir, tmp_path, seed_palette=seed))
    assert enc.palette.colors[:3] == ["", "00ff00", "0000ff"]
    assert set(enc.palette.colors) == set(PALETTE)


def test_cli_writes_document(parts_dir, tmp_path):
    out = tmp_path / "data" / "image-data.json"
    main([
        "--images-dir", str(parts_dir), "--output", str(out),
        "--folders", *FOLDERS, "--env-file", str(tmp_path / "missing.env"),
    ])
    doc = json.loads(out.read_text(encoding="utf-8"))
    assert doc["bgcolors"] == ["d5d7e1", "e1d7d5"]
    assert doc["palette"] == PALETTE
    assert list(doc["images"]) == ["bodies", "heads"]


def test_cli_flatten(parts_dir, tmp_path):
    out = tmp_path / "flat.json"
    main([
        "--images-dir", str(parts_dir), "--output", str(out), "--flatten",
        "--folders", *FOLDERS, "--env-file", str(tmp_path / "missing.env"),
    ])
    doc = json.loads(out.read_text(encoding="utf-8"))
    assert [e["filename"] for e in doc["images"]["root"]] == ["body-a", "body-b", "head-a"]


def test_cli_failure_writes_nothing(parts_dir, tmp_path):
    save_png(parts_dir / "2-heads" / "wide.png", 300, 1, {(299, 0): RED})
    out = tmp_path / "never.json"
    with pytest.raises(ValueError):
        main([
            "--images-dir", str(parts_dir), "--output", str(out),
            "--folders", *FOLDERS, "--env-file", str(tmp_path / "missing.env"),
        ])
    assert not out.exists()


def test_decode_error_is_fatal_with_workers(parts_dir, tmp_path):
    (parts_dir / "1-bodies" / "broken.png").write_bytes(b"not a png")
    with pytest.raises(DecodeError):
        encode_folders(_settings(parts_dir, tmp_path, workers=4))


def test_abort_cancels_queued_decodes(monkeypatch):
    calls = []

    def fake_read(path):
        calls.append(path)
        if path.name == "bad.png":
            raise DecodeError(path)
        time.sleep(0.05)
        return None

    monkeypatch.setattr(main_mod, "read_png_image", fake_read)
    jobs = [(Path("bad.png"), "bad", "x")] + [(Path(f"{i}.png"), str(i), "x") for i in range(20)]

    decoded = _decode_all(jobs, workers=2)
    _, source, error = next(decoded)
    assert source is None
    assert isinstance(error, DecodeError)
    decoded.close()
    assert len(calls) < len(jobs)
