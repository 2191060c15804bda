"""Tests for the echoprint command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from echoprint.cli.main import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def bundle_file(tmp_path: Path) -> Path:
    path = tmp_path / "bundle.json"
    path.write_text(
        json.dumps(
            {
                "canvas": {"supported": True, "hash": "abc"},
                "webgl": {"supported": True},
                "audio": {"supported": False},
                "hardware": {"cpuCores": 8},
            }
        )
    )
    return path


@pytest.fixture
def context_file(tmp_path: Path) -> Path:
    path = tmp_path / "context.json"
    path.write_text(
        json.dumps(
            {
                "domains": ["g.alicdn.com", "criteo.com"],
                "scripts": [],
                "cookies": [],
                "localStorage": [],
            }
        )
    )
    return path


def test_scan_json(runner, bundle_file, context_file):
    result = runner.invoke(
        cli, ["scan", str(bundle_file), "--page-context", str(context_file), "--format", "json"]
    )
    assert result.exit_code == 0, result.output
    report = json.loads(result.output)
    assert report["overall_risk"] == "CRITICAL"
    assert report["total_risk_score"] == 100
    assert report["results"][0]["profile"]["id"] == "aliexpress"
    assert report["results"][0]["risk_score"] == 40


def test_scan_rich(runner, bundle_file, context_file):
    result = runner.invoke(cli, ["scan", str(bundle_file), "-p", str(context_file)])
    assert result.exit_code == 0, result.output
    assert "AliExpress" in result.output
    assert "Overall Risk" in result.output


def test_scan_without_context_surfaces_nothing(runner, tmp_path):
    path = tmp_path / "empty.json"
    path.write_text("{}")
    result = runner.invoke(cli, ["scan", str(path)])
    assert result.exit_code == 0, result.output
    assert "No tracking platforms surfaced" in result.output
    assert "LOW" in result.output


def test_scan_invalid_bundle(runner, tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json")
    result = runner.invoke(cli, ["scan", str(path)])
    assert result.exit_code == 1
    assert "Invalid signal bundle" in result.output


def test_scan_missing_catalog(runner, bundle_file, tmp_path, monkeypatch):
    monkeypatch.setenv("ECHOPRINT_CATALOG", str(tmp_path / "nowhere.yaml"))
    result = runner.invoke(cli, ["scan", str(bundle_file)])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_scan_custom_catalog(runner, bundle_file, context_file, tmp_path, monkeypatch):
    catalog = tmp_path / "catalog.yaml"
    catalog.write_text(
        "profiles:\n"
        "  - id: criteo\n"
        "    name: Criteo\n"
        "    description: Retargeting network\n"
        "    risk_level: HIGH\n"
        "    category: adtech\n"
        "    tracking_infra:\n"
        "      primary_domains: [criteo.com, criteo.net, criteo.org]\n"
    )
    monkeypatch.setenv("ECHOPRINT_CATALOG", str(catalog))
    result = runner.invoke(
        cli, ["scan", str(bundle_file), "-p", str(context_file), "--format", "json"]
    )
    assert result.exit_code == 0, result.output
    report = json.loads(result.output)
    assert [r["profile"]["id"] for r in report["results"]] == ["criteo"]
    assert report["results"][0]["confidence"] == 33


def test_check_json(runner, bundle_file):
    result = runner.invoke(cli, ["check", "aliexpress", str(bundle_file), "--format", "json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["risk_score"] == 20
    assert data["detected"] is False


def test_check_unknown_profile(runner, bundle_file):
    result = runner.invoke(cli, ["check", "nonexistent", str(bundle_file)])
    assert result.exit_code == 1
    assert "Unknown profile" in result.output


def test_profiles_list(runner):
    result = runner.invoke(cli, ["profiles"])
    assert result.exit_code == 0, result.output
    for profile_id in ("aliexpress", "amazon", "facebook", "google", "tiktok"):
        assert profile_id in result.output


def test_profiles_filtered(runner):
    result = runner.invoke(cli, ["profiles", "--category", "ecommerce", "--risk", "HIGH"])
    assert result.exit_code == 0, result.output
    assert "amazon" in result.output
    assert "aliexpress" not in result.output


def test_profiles_no_match(runner):
    result = runner.invoke(cli, ["profiles", "--category", "finance"])
    assert result.exit_code == 0
    assert "No matching profiles" in result.output


def test_info(runner):
    result = runner.invoke(cli, ["info", "facebook"])
    assert result.exit_code == 0, result.output
    assert "fbevents.js" in result.output
    assert "Ireland" in result.output


def test_info_unknown(runner):
    result = runner.invoke(cli, ["info", "nonexistent"])
    assert result.exit_code == 1


def test_catalog_text_rendered_literally(
    runner, bundle_file, context_file, tmp_path, monkeypatch
):
    catalog = tmp_path / "catalog.yaml"
    catalog.write_text(
        "profiles:\n"
        "  - id: acme\n"
        "    name: Acme [beta]\n"
        "    description: Uses [red]markup[/red] in its text\n"
        "    risk_level: HIGH\n"
        "    category: adtech\n"
        "    tracking_infra:\n"
        "      primary_domains: [criteo.com]\n"
        "    countermeasures:\n"
        "      clear_cookies: true\n"
    )
    monkeypatch.setenv("ECHOPRINT_CATALOG", str(catalog))

    result = runner.invoke(cli, ["info", "acme"])
    assert result.exit_code == 0, result.output
    assert "Acme [beta]" in result.output
    assert "[red]markup[/red]" in result.output

    result = runner.invoke(cli, ["scan", str(bundle_file), "-p", str(context_file)])
    assert result.exit_code == 0, result.output
    assert "Clear Acme [beta] cookies regularly" in result.output
