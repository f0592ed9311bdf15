"""Tests for enrichment operations and their coordinator."""

from unittest.mock import AsyncMock, patch

import aiohttp
import pytest

from newsletter_agent.models.content import SnippetWithComment, SourceSnippet
from newsletter_agent.models.quality import ToolResult
from newsletter_agent.models.workflow import WorkflowState
from newsletter_agent.tools import ToolCoordinator, append_tool_results, resolve_tool_input
from newsletter_agent.tools.base import EnrichmentOperation
from newsletter_agent.tools.completion import CompletionOperation
from newsletter_agent.tools.text_analysis import (
    KeywordExtractionOperation,
    SentimentAnalysisOperation,
)
from newsletter_agent.tools.url_content import UrlContentOperation, extract_article_text

from tests.fakes import ScriptedGateway, failure


def _state(**kwargs):
    fields = {"topic": "AI agents"}
    fields.update(kwargs)
    return WorkflowState(**fields)


def _snippet(url=None):
    return SnippetWithComment(
        snippet=SourceSnippet(id="1", title="t", content="c", url=url)
    )


class TestInputResolution:
    """Test which part of the state each operation reads."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("web_search", "AI agents"),
            ("analyze_trends", "AI agents"),
            ("competitor_analysis", "AI agents"),
            ("fact_check", "Costs are falling"),
            ("extract_keywords", "Assembled sources"),
            ("sentiment_analysis", "Assembled sources"),
            ("generate_image_description", "Assembled sources"),
            ("extract_url_content", "https://example.com/a"),
            ("teleport", None),
        ],
    )
    def test_lookup(self, name, expected):
        state = _state(
            key_insight="Costs are falling",
            source_content="Assembled sources",
            snippets=[_snippet(), _snippet("https://example.com/a")],
        )
        assert resolve_tool_input(name, state) == expected

    def test_fallbacks_to_topic(self):
        state = _state()
        assert resolve_tool_input("fact_check", state) == "AI agents"
        assert resolve_tool_input("extract_keywords", state) == "AI agents"
        assert resolve_tool_input("extract_url_content", state) is None


class TestToolCoordinator:
    """Test concurrent execution and failure isolation."""

    @pytest.mark.asyncio
    async def test_results_follow_request_order(self):
        gateway = ScriptedGateway({"web_search": "Search hits", "fact_check": "Checked"})
        coordinator = ToolCoordinator(gateway)
        results = await coordinator.run(["fact_check", "web_search"], _state())

        assert [r.tool_name for r in results] == ["fact_check", "web_search"]
        assert [r.output for r in results] == ["Checked", "Search hits"]
        assert all(r.success for r in results)
        assert gateway.variables("web_search")[0] == {"input": "AI agents"}

    @pytest.mark.asyncio
    async def test_unknown_operation(self):
        results = await ToolCoordinator(ScriptedGateway()).run(["teleport"], _state())
        assert results[0].success is False
        assert results[0].output == "Unknown operation: teleport"

    @pytest.mark.asyncio
    async def test_missing_url(self):
        results = await ToolCoordinator(ScriptedGateway()).run(
            ["extract_url_content"], _state(snippets=[_snippet()])
        )
        assert results[0].success is False
        assert results[0].output == "No input available for this operation"

    @pytest.mark.asyncio
    async def test_one_failure_is_isolated(self):
        gateway = ScriptedGateway(
            {"web_search": failure("web_search"), "analyze_trends": "Trend report"}
        )
        results = await ToolCoordinator(gateway).run(
            ["web_search", "analyze_trends"], _state()
        )

        assert results[0].success is False
        assert results[0].output.startswith("Failed: web_search:")
        assert results[1].success is True

    @pytest.mark.asyncio
    async def test_custom_operations(self):
        class Shout(EnrichmentOperation):
            @property
            def operation_name(self):
                return "shout"

            async def run(self, value):
                return value.upper()

        coordinator = ToolCoordinator(operations={"shout": Shout()})
        assert coordinator.list_operations() == ["shout"]
        results = await coordinator.run(["shout"], _state())
        # "shout" has no input mapping
        assert results[0].output == "No input available for this operation"

    def test_default_registry(self):
        names = ToolCoordinator(ScriptedGateway()).list_operations()
        assert set(names) == {
            "web_search",
            "fact_check",
            "analyze_trends",
            "competitor_analysis",
            "generate_image_description",
            "extract_keywords",
            "sentiment_analysis",
            "extract_url_content",
        }

    @pytest.mark.asyncio
    async def test_empty_request(self):
        assert await ToolCoordinator(ScriptedGateway()).run([], _state()) == []


class TestAppendResults:
    def test_only_successful_results_are_numbered(self):
        results = [
            ToolResult(tool_name="web_search", output="Hits", success=True),
            ToolResult(tool_name="fact_check", output="Failed: boom"),
            ToolResult(tool_name="extract_keywords", output="Keywords: ai", success=True),
        ]
        merged = append_tool_results("Sources", results)
        assert merged == (
            "Sources\n\n## Enrichment results\n\n"
            "### 1. web_search\nHits\n\n"
            "### 2. extract_keywords\nKeywords: ai"
        )

    def test_nothing_successful_leaves_text_alone(self):
        assert append_tool_results("Sources", [ToolResult(tool_name="x")]) == "Sources"


class TestLocalOperations:
    """Test the operations that need no completion call."""

    @pytest.mark.asyncio
    async def test_keywords(self):
        text = "Agents agents agents reduce cost. Cost matters for agents and models."
        output = await KeywordExtractionOperation(limit=2).run(text)
        assert output == "Keywords: agents, cost"

    @pytest.mark.asyncio
    async def test_keywords_need_content_words(self):
        with pytest.raises(ValueError):
            await KeywordExtractionOperation().run("the and of to")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "text,label",
        [
            ("Strong growth and record gains after a breakthrough.", "positive"),
            ("Layoffs, losses and a data breach deepen the crisis.", "negative"),
            ("The meeting is on Tuesday.", "neutral"),
        ],
    )
    async def test_sentiment(self, text, label):
        output = await SentimentAnalysisOperation().run(text)
        assert output.startswith(f"Overall sentiment: {label}")

    @pytest.mark.asyncio
    async def test_completion_operation_truncates_input(self):
        gateway = ScriptedGateway({"fact_check": "  ok  "})
        output = await CompletionOperation("fact_check", gateway).run("x" * 4000)

        assert output == "ok"
        assert gateway.variables("fact_check")[0]["input"] == "x" * 3000 + "..."


class TestUrlContent:
    def test_extract_article_text_prefers_article(self):
        html = (
            "<html><body><nav>Menu</nav><article><h1>Headline</h1>"
            "<p>First   paragraph.</p><script>var x;</script></article>"
            "<footer>Legal</footer></body></html>"
        )
        assert extract_article_text(html) == "Headline First paragraph."

    def test_extract_article_text_limit(self):
        html = "<main>" + "word " * 100 + "</main>"
        text = extract_article_text(html, limit=20)
        assert len(text) == 23
        assert text.endswith("...")

    @pytest.mark.asyncio
    async def test_run_uses_fetched_markup(self):
        operation = UrlContentOperation()
        with patch.object(
            operation,
            "fetch_html",
            AsyncMock(return_value="<article>Fetched text</article>"),
        ):
            assert await operation.run("https://example.com") == "Fetched text"

    @pytest.mark.asyncio
    async def test_network_errors_propagate(self):
        operation = UrlContentOperation()
        with patch.object(
            operation, "fetch_html", AsyncMock(side_effect=aiohttp.ClientError("down"))
        ):
            with pytest.raises(aiohttp.ClientError):
                await operation.run("https://example.com")

    @pytest.mark.asyncio
    async def test_empty_page_is_an_error(self):
        operation = UrlContentOperation()
        with patch.object(operation, "fetch_html", AsyncMock(return_value="<html></html>")):
            with pytest.raises(ValueError):
                await operation.run("https://example.com")
