"""Tests for the newsletter agent CLI."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner

from newsletter_agent.core.errors import NewsletterGenerationError
from newsletter_agent.models.content import NewsletterDraft
from newsletter_agent.newsletter_bot import cli


@pytest.fixture
def runner(monkeypatch):
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    return CliRunner()


def _write_request(path, **fields):
    payload = {"topic": "AI agents", **fields}
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_cli_group_exists(runner):
    """Test that the CLI group is properly defined."""
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "Newsletter generation agent CLI." in result.output
    for command in ("generate", "health", "config", "personas"):
        assert command in result.output


def test_personas_command(runner):
    result = runner.invoke(cli, ["personas"])
    assert result.exit_code == 0
    assert "writer: 85%" in result.output
    assert "editor: 90%" in result.output
    assert "1. Explicit user requirements" in result.output


def test_config_hides_secrets(runner, monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-secret-value")
    with runner.isolated_filesystem():
        result = runner.invoke(cli, ["config"])

    assert result.exit_code == 0
    assert "OpenRouter: ✅ Configured" in result.output
    assert "sk-secret-value" not in result.output


def test_config_reports_missing_key(runner):
    with runner.isolated_filesystem():
        result = runner.invoke(cli, ["config"])
    assert "OpenRouter: ❌ Missing" in result.output


class TestGenerateCommand:
    """Test the generate command end to end with a stubbed generator."""

    def test_writes_markdown(self, runner, tmp_path):
        request_file = _write_request(tmp_path / "request.json")
        output_file = tmp_path / "issue.md"
        draft = NewsletterDraft(
            title="Cheaper Agents",
            content="Body text.",
            processing_steps=["assemble", "generate", "title"],
            warnings=["No source snippets were provided"],
        )
        generator = MagicMock()
        generator.generate_newsletter = AsyncMock(return_value=draft)

        with patch(
            "newsletter_agent.core.newsletter.NewsletterGenerator", return_value=generator
        ):
            result = runner.invoke(
                cli, ["generate", request_file, "-o", str(output_file), "--quality-gate"]
            )

        assert result.exit_code == 0, result.output
        assert "📰 Cheaper Agents" in result.output
        assert "Steps: assemble → generate → title" in result.output
        assert "⚠️  No source snippets were provided" in result.output
        assert output_file.read_text(encoding="utf-8") == "# Cheaper Agents\n\nBody text.\n"
        kwargs = generator.generate_newsletter.call_args.kwargs
        assert kwargs == {"multi_persona": False, "quality_gate": True}

    def test_multi_persona_flag(self, runner, tmp_path):
        request_file = _write_request(tmp_path / "request.json")
        generator = MagicMock()
        generator.generate_newsletter = AsyncMock(
            return_value=NewsletterDraft(
                title="T", content="C", generation_mode="multi_persona"
            )
        )

        with patch(
            "newsletter_agent.core.newsletter.NewsletterGenerator", return_value=generator
        ):
            result = runner.invoke(cli, ["generate", request_file, "--multi-persona"])

        assert result.exit_code == 0, result.output
        assert "Mode: multi_persona" in result.output
        kwargs = generator.generate_newsletter.call_args.kwargs
        assert kwargs == {"multi_persona": True, "quality_gate": None}

    def test_invalid_request_exits_nonzero(self, runner, tmp_path):
        request_file = tmp_path / "request.json"
        request_file.write_text(json.dumps({"topic": ""}), encoding="utf-8")

        result = runner.invoke(cli, ["generate", str(request_file)])
        assert result.exit_code == 1

    def test_generation_failure_exits_nonzero(self, runner, tmp_path):
        request_file = _write_request(tmp_path / "request.json")
        generator = MagicMock()
        generator.generate_newsletter = AsyncMock(
            side_effect=NewsletterGenerationError("No completion provider configured")
        )

        with patch(
            "newsletter_agent.core.newsletter.NewsletterGenerator", return_value=generator
        ):
            result = runner.invoke(cli, ["generate", request_file])

        assert result.exit_code == 1

    def test_missing_file(self, runner):
        result = runner.invoke(cli, ["generate", "does-not-exist.json"])
        assert result.exit_code == 2
