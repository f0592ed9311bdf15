import pytest

from newsletter_agent.models.content import SnippetWithComment, SourceSnippet


@pytest.fixture
def mock_settings():
    """Mock settings for testing."""
    from newsletter_agent.models.settings import Settings

    return Settings(
        _env_file=None,
        openrouter_api_key="test_key",
        openrouter_min_request_interval=0.0,
        completion_timeout=5.0,
    )


@pytest.fixture
def sample_snippets():
    long_text = (
        "OpenAI announced a new reasoning model on Tuesday. "
        "The key change is a significant drop in inference cost for developers. "
        "Early benchmarks show gains on maths and coding tasks. "
        "Pricing starts at a fraction of the previous tier."
    )
    return [
        SnippetWithComment(
            snippet=SourceSnippet(
                id="s1",
                title="New reasoning model",
                url="https://openai.com/blog/new-model",
                content=long_text,
            ),
            user_comment="Cost matters most for our readers",
        ),
        SnippetWithComment(
            snippet=SourceSnippet(
                id="s2",
                title="Short note",
                content="Agents are getting cheaper.",
                user_comment="Stored comment",
            )
        ),
    ]
