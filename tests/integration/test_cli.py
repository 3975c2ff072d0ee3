"""
Integration tests for the rendering CLI.
Tests: command line -> render/export/validate -> files and exit codes.
"""

import shutil
import subprocess
import sys
from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

from scripts import render_resume
from vellum.contexts.rendering import exporter

FIXTURES_PATH = Path(__file__).resolve().parents[1] / "fixtures"
SAMPLE_RESUME = FIXTURES_PATH / "sample_resume.json"

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path, monkeypatch):
    """Send session logs to a temporary directory and restore loguru afterwards."""
    monkeypatch.setattr(render_resume, "LOGS_PATH", tmp_path / "logs")
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.mark.integration
def test_html_command(tmp_path):
    """Test rendering a resume file to HTML."""
    output = tmp_path / "site" / "index.html"

    result = runner.invoke(render_resume.app, ["html", str(SAMPLE_RESUME), "-o", str(output)])

    assert result.exit_code == 0, result.output
    assert "<title>Richard Hendriks</title>" in output.read_text(encoding="utf-8")


@pytest.mark.integration
def test_html_command_default_output(tmp_path):
    """Test that the HTML is written next to the JSON file by default."""
    resume_file = tmp_path / "resume.json"
    shutil.copy(SAMPLE_RESUME, resume_file)

    result = runner.invoke(render_resume.app, ["html", str(resume_file)])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "resume.html").exists()


@pytest.mark.integration
def test_html_command_rejects_non_object(tmp_path):
    """Test that a JSON file without a top-level object fails cleanly."""
    resume_file = tmp_path / "resume.json"
    resume_file.write_text('"not an object"', encoding="utf-8")

    result = runner.invoke(render_resume.app, ["html", str(resume_file)])

    assert result.exit_code == 1


@pytest.mark.integration
def test_export_command(tmp_path, monkeypatch):
    """Test exporting with the renderer stubbed out."""

    def fake_run(cmd, **kwargs):
        Path(cmd[-1]).write_bytes(b"%PDF-1.4 fake")
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    monkeypatch.setattr(exporter.subprocess, "run", fake_run)
    pdf_file = tmp_path / "resume.pdf"

    result = runner.invoke(render_resume.app, ["export", str(SAMPLE_RESUME), str(pdf_file)])

    assert result.exit_code == 0, result.output
    assert "Export succeeded" in result.output
    assert pdf_file.exists()


@pytest.mark.integration
def test_export_command_failure(tmp_path, monkeypatch):
    """Test that a renderer failure exits with status 1."""

    def fake_run(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(exporter.subprocess, "run", fake_run)

    result = runner.invoke(
        render_resume.app,
        ["export", str(SAMPLE_RESUME), str(tmp_path / "resume.pdf"), "--renderer", "no-such-tool"],
    )

    assert result.exit_code == 1
    assert "PDF renderer not found: no-such-tool" in result.output


@pytest.mark.integration
def test_validate_command_missing_pdf(tmp_path):
    """Test that validating a missing PDF exits with status 1."""
    result = runner.invoke(render_resume.app, ["validate", str(tmp_path / "missing.pdf")])

    assert result.exit_code == 1
    assert "PDF not found" in result.output


@pytest.mark.integration
def test_no_command_shows_help():
    """Test that invoking without a command prints help."""
    result = runner.invoke(render_resume.app, [])

    assert result.exit_code == 0
    assert "export" in result.output
