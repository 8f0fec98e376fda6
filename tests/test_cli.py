from __future__ import annotations

import struct
from pathlib import Path

from typer.testing import CliRunner

from coalesced.bundle.io import write_text
from coalesced.cli.main import app
from coalesced.codecs.binary import dump_bundle_bytes, read_binary, write_binary
from conftest import demo_bundle, make_bundle


def _write_demo_bin(tmp_path: Path) -> Path:
    bundle = demo_bundle()
    p = tmp_path / bundle.name
    write_binary(bundle, p)
    return p


def test_version() -> None:
    from coalesced import __version__

    res = CliRunner().invoke(app, ["version"])
    assert res.exit_code == 0
    assert res.output.strip() == __version__


def test_unpack_defaults_to_bundle_path_without_extension(tmp_path: Path) -> None:
    bin_path = _write_demo_bin(tmp_path)

    res = CliRunner().invoke(app, ["unpack", str(bin_path)])

    assert res.exit_code == 0, res.output
    out_dir = tmp_path / "Coalesced_INT"
    assert res.output.strip() == str(out_dir)
    assert (out_dir / "Coalesced_INT.extracted").is_file()
    assert (out_dir / "Empty.ini").is_file()


def test_unpack_then_pack_rebuilds_identical_bytes(tmp_path: Path) -> None:
    runner = CliRunner()
    bin_path = _write_demo_bin(tmp_path)
    out_dir = tmp_path / "extracted"
    rebuilt = tmp_path / "rebuilt" / "Coalesced_INT.bin"

    res1 = runner.invoke(app, ["unpack", str(bin_path), "--out-dir", str(out_dir)])
    assert res1.exit_code == 0, res1.output
    res2 = runner.invoke(app, ["pack", str(out_dir), str(rebuilt)])
    assert res2.exit_code == 0, res2.output

    assert rebuilt.read_bytes() == bin_path.read_bytes()
    assert read_binary("Coalesced_INT.bin", rebuilt) == demo_bundle()


def test_pack_with_explicit_name(tmp_path: Path) -> None:
    runner = CliRunner()
    bin_path = _write_demo_bin(tmp_path)
    out_dir = tmp_path / "extracted"
    runner.invoke(app, ["unpack", str(bin_path), "--out-dir", str(out_dir)])

    out = tmp_path / "renamed.bin"
    res = runner.invoke(app, ["pack", str(out_dir), str(out), "--name", "Coalesced_INT.bin"])
    assert res.exit_code == 0, res.output
    assert out.read_bytes() == bin_path.read_bytes()


def test_pack_without_manifest_reports_error(tmp_path: Path) -> None:
    res = CliRunner().invoke(app, ["pack", str(tmp_path), str(tmp_path / "Demo.bin")])
    assert res.exit_code == 2
    assert "error: manifest not found" in res.output


def test_unpack_malformed_binary_reports_error(tmp_path: Path) -> None:
    p = tmp_path / "bad.bin"
    p.write_bytes(struct.pack("<i", 1) + struct.pack("<i", 4))

    res = CliRunner().invoke(app, ["unpack", str(p)])

    assert res.exit_code == 2
    assert "unsupported string length marker" in res.output


def test_unpack_allow_trailing(tmp_path: Path) -> None:
    p = tmp_path / "trail.bin"
    p.write_bytes(dump_bundle_bytes(demo_bundle()) + b"\xff")
    runner = CliRunner()

    assert runner.invoke(app, ["unpack", str(p)]).exit_code == 2
    res = runner.invoke(app, ["unpack", str(p), "--allow-trailing"])
    assert res.exit_code == 0, res.output


def test_verify_ok(tmp_path: Path) -> None:
    bin_path = _write_demo_bin(tmp_path)
    work = tmp_path / "work"

    res = CliRunner().invoke(app, ["verify", str(bin_path), "--work-dir", str(work)])

    assert res.exit_code == 0, res.output
    assert res.output.strip() == "OK"
    assert (work / "Coalesced_INT.extracted").is_file()


def test_verify_reports_normalization(tmp_path: Path) -> None:
    p = tmp_path / "lf.bin"
    write_binary(make_bundle("lf.bin", {"Cfg": {"S": [("k", "a\nb")]}}), p)

    res = CliRunner().invoke(app, ["verify", str(p)])

    assert res.exit_code == 0, res.output
    assert "OK (normalized" in res.output


def test_verify_unrepresentable_bundle_fails(tmp_path: Path) -> None:
    p = tmp_path / "mixed.bin"
    write_binary(make_bundle("mixed.bin", {"Cfg": {"S": [("k", "a\rb\nc")]}}), p)

    res = CliRunner().invoke(app, ["verify", str(p)])

    assert res.exit_code == 2
    assert "mixed line endings" in res.output


def test_inspect_binary_and_directory(tmp_path: Path) -> None:
    runner = CliRunner()
    bin_path = _write_demo_bin(tmp_path)

    res = runner.invoke(app, ["inspect", str(bin_path)])
    assert res.exit_code == 0, res.output
    assert res.output.splitlines()[0] == "Coalesced_INT.bin: 3 files"
    assert "Empty.ini" in res.output

    out_dir = tmp_path / "extracted"
    runner.invoke(app, ["unpack", str(bin_path), "--out-dir", str(out_dir)])
    res2 = runner.invoke(app, ["inspect", str(out_dir), "--name", "Coalesced_INT.bin", "--pairs"])
    assert res2.exit_code == 0, res2.output
    assert "MaxSmoothedFrameRate" in res2.output

    res3 = runner.invoke(app, ["inspect", str(out_dir)])
    assert res3.exit_code != 0


def test_pack_non_utf8_text_file_reports_error(tmp_path: Path) -> None:
    runner = CliRunner()
    out_dir = tmp_path / "extracted"
    write_text(make_bundle("Demo.bin", {"Cfg": {"S": [("k", "v")]}}), out_dir)
    (out_dir / "Cfg").write_bytes(b"[S]\nk=caf\xe9\n")

    res = runner.invoke(app, ["pack", str(out_dir), str(tmp_path / "Demo.bin")])
    assert res.exit_code == 2
    assert "not valid utf-8-sig text" in res.output
    assert not (tmp_path / "Demo.bin").exists()
