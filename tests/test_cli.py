import json
from pathlib import Path

import pytest
import yaml

from assetcat import __version__, cli
from assetcat.reporting import PlainReporter, set_reporter

from catalog_helper import make_catalog, make_imageset, make_namespace


def _catalog(tmp_path: Path) -> Path:
    cat = make_catalog(tmp_path / "App")
    make_imageset(cat, "Icon")
    make_imageset(cat, "icon")
    make_imageset(make_namespace(cat, "Onboarding"), "Logo")
    return cat


def teardown_function():
    set_reporter(PlainReporter())


def test_generate_json_output(tmp_path, capsys):
    cat = _catalog(tmp_path)
    rc = cli.main(["generate", str(cat), "--json", "--access-level", "public"])
    assert rc == 0
    captured = capsys.readouterr()
    doc = json.loads(captured.out)
    assert doc["version"] == 1
    assert doc["counts"] == {"catalogs": 1, "namespaces": 1, "images": 2}
    tree = doc["tree"]
    assert tree["qualified_name"] == "R.image"
    assert tree["access_level"] == "public"
    assert [l["lookup_key"] for l in tree["leaves"]] == ["icon"]
    assert tree["children"][0]["leaves"][0]["lookup_key"] == "onboarding/logo"
    assert "W_DUPLICATE_SYMBOL" in captured.err


def test_generate_writes_output_and_reports_failures(tmp_path, capsys):
    cat = _catalog(tmp_path)
    out = tmp_path / "out" / "tree.json"
    rc = cli.main(
        [
            "generate",
            str(cat),
            str(tmp_path / "Missing.xcassets"),
            "--output",
            str(out),
            "--prefix",
            "",
            "--root-name",
            "images",
        ]
    )
    assert rc == 1
    doc = json.loads(out.read_text())
    assert doc["tree"]["qualified_name"] == "images"
    assert [f["code"] for f in doc["failures"]] == ["E_ROOT_UNREADABLE"]
    assert "ERROR" in capsys.readouterr().err


def test_generate_with_config_and_search(tmp_path, capsys):
    _catalog(tmp_path)
    cfg = tmp_path / "assetcat.yaml"
    cfg.write_text(yaml.safe_dump({"root_name": "assets"}))
    rc = cli.main(
        ["-r", "json", "generate", "--config", str(cfg), "--search", str(tmp_path), "--json"]
    )
    assert rc == 0
    captured = capsys.readouterr()
    assert json.loads(captured.out)["tree"]["name"] == "assets"
    events = [json.loads(line) for line in captured.err.splitlines() if line.strip()]
    summaries = [e for e in events if e["event"] == "summary"]
    assert {s["summary_type"] for s in summaries} >= {"scan", "generate"}
    warnings = [e for e in events if e.get("level") == "warning"]
    assert any(w.get("code") == "W_DUPLICATE_SYMBOL" for w in warnings)


def test_generate_without_catalogs_is_usage_error(capsys):
    assert cli.main(["generate"]) == 2
    assert "No catalogs" in capsys.readouterr().err


def test_bad_config_exits_with_error(tmp_path, capsys):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text(yaml.safe_dump({"access_level": "nope"}))
    assert cli.main(["generate", "--config", str(cfg)]) == 2
    assert "E_CONFIG" in capsys.readouterr().err


def test_scan_json(tmp_path, capsys):
    cat = _catalog(tmp_path)
    rc = cli.main(["-r", "silent", "scan", str(cat), "--json"])
    assert rc == 0
    doc = json.loads(capsys.readouterr().out)
    assert doc["name"] == "Images.xcassets"
    assert sorted(doc["leaf_resources"]) == ["Icon", "icon"]
    assert doc["children"][0]["resource_path"] == "onboarding"


def test_scan_plain_listing(tmp_path, capsys):
    cat = _catalog(tmp_path)
    assert cli.main(["scan", str(cat)]) == 0
    err = capsys.readouterr().err
    assert "[Namespaces in Images.xcassets]" in err
    assert "onboarding: Logo" in err


def test_scan_unsupported_catalog(tmp_path, capsys):
    folder = tmp_path / "Plain"
    folder.mkdir()
    assert cli.main(["scan", str(folder)]) == 2
    assert "E_UNSUPPORTED_EXTENSION" in capsys.readouterr().err


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--version"])
    assert exc.value.code == 0
    assert capsys.readouterr().out.strip() == f"assetcat {__version__}"
