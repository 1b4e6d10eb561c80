import json

import pytest

from face_template_migration.cli import build_parser, main


def test_version_from_base64_argument(capsys, legacy_b64):
    main(["version", legacy_b64[0]])
    assert json.loads(capsys.readouterr().out) == {"version": 16}


def test_version_from_file(tmp_path, capsys, legacy_templates):
    path = tmp_path / "template.bin"
    path.write_bytes(legacy_templates[3])
    main(["version", str(path)])
    assert json.loads(capsys.readouterr().out) == {"version": 24}


def test_convert_prints_vector(tmp_path, capsys, legacy_b64):
    path = tmp_path / "template.b64"
    path.write_text(legacy_b64[4] + "\n")
    main(["convert", str(path), "--print"])
    out = json.loads(capsys.readouterr().out)
    assert out["version"] == 24
    assert out["length"] == 128
    assert len(out["vector"]) == 128


def test_convert_without_vector(capsys, legacy_b64):
    main(["convert", legacy_b64[0], "--version", "16"])
    out = json.loads(capsys.readouterr().out)
    assert out == {"version": 16, "length": 128}


def test_convert_version_mismatch_exits(capsys, legacy_b64):
    with pytest.raises(SystemExit) as exc:
        main(["convert", legacy_b64[0], "--version", "24"])
    assert exc.value.code == 1
    err = json.loads(capsys.readouterr().err)
    assert err["type"] == "VersionMismatchError"


def test_batch_file(tmp_path, capsys, legacy_b64):
    path = tmp_path / "templates.txt"
    path.write_text("\n".join(legacy_b64) + "\n\n")
    main(["batch", str(path), "--no-progress"])
    rows = json.loads(capsys.readouterr().out)
    assert [r["version"] for r in rows] == [16, 16, 16, 24, 24]


def test_batch_by_version_to_output(tmp_path, legacy_b64):
    path = tmp_path / "templates.txt"
    path.write_text("\n".join(legacy_b64))
    output = tmp_path / "out.json"
    main(["batch", str(path), "--version", "24", "--no-progress", "--output", str(output)])
    rows = json.loads(output.read_text())
    assert len(rows) == 2
    assert all(r["version"] == 24 for r in rows)


def test_batch_folder_with_workers(tmp_path, capsys, legacy_templates):
    for i, template in enumerate(legacy_templates):
        (tmp_path / f"{i:02d}.bin").write_bytes(template)
    main(["batch", str(tmp_path), "--workers", "2", "--version", "16"])
    rows = json.loads(capsys.readouterr().out)
    assert len(rows) == 3


def test_batch_rejects_bad_lines(tmp_path, capsys):
    path = tmp_path / "templates.txt"
    path.write_text("not base64!\n")
    with pytest.raises(SystemExit):
        main(["batch", str(path), "--no-progress"])
    assert "Base64DecodeError" in capsys.readouterr().err


def test_parser_defaults():
    args = build_parser().parse_args(["convert", "x"])
    assert args.version is None
    assert args.max_rounds == 8
    assert args.max_depth == 16


@pytest.mark.parametrize("workers", ["1", "2"])
def test_batch_unknown_version_exits(tmp_path, capsys, legacy_b64, workers):
    path = tmp_path / "templates.txt"
    path.write_text("\n".join(legacy_b64))
    with pytest.raises(SystemExit) as exc:
        main(["batch", str(path), "--version", "99", "--workers", workers, "--no-progress"])
    assert exc.value.code == 1
    assert json.loads(capsys.readouterr().err)["type"] == "UnsupportedVersionError"


def test_missing_template_path(tmp_path, capsys):
    with pytest.raises(SystemExit):
        main(["version", str(tmp_path / "missing.bin")])
    assert json.loads(capsys.readouterr().err)["type"] == "FileNotFoundError"
