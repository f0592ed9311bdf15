"""Command line interface for the newsletter agent."""

import asyncio
import logging
import sys
from pathlib import Path

import aiohttp
import click

# Heavy dependencies are imported inside the commands so that ``cli`` stays
# cheap to import, e.g. for tests that only check command registration.

logger = logging.getLogger(__name__)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug mode")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Newsletter generation agent CLI.

    Turns captured source snippets into a finished newsletter through a
    bounded generate/critique loop, persona synthesis and a quality gate.
    """
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    # Set up logging before any other logging calls
    log_level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(level=log_level, force=True)
    logger.debug("Debug mode enabled")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--multi-persona", is_flag=True, help="Draft with four personas and synthesise"
)
@click.option(
    "--quality-gate/--no-quality-gate",
    default=None,
    help="Run the quality gate and self-correction loop afterwards",
)
@click.option(
    "--output", "-o", type=click.Path(dir_okay=False), help="Write Markdown here"
)
@click.pass_context
def generate(
    ctx: click.Context,
    input_file: str,
    multi_persona: bool,
    quality_gate,
    output: str,
) -> None:
    """Generate a newsletter from a JSON generation request."""

    async def _generate():
        from pydantic import ValidationError

        from newsletter_agent.core.errors import NewsletterGenerationError
        from newsletter_agent.core.newsletter import NewsletterGenerator
        from newsletter_agent.models.content import GenerationRequest
        from newsletter_agent.models.settings import Settings

        try:
            request = GenerationRequest.model_validate_json(
                Path(input_file).read_text(encoding="utf-8")
            )
        except ValidationError as e:
            logger.error(f"❌ Invalid generation request: {e}")
            sys.exit(1)

        settings = Settings(debug=ctx.obj.get("debug", False))
        generator = NewsletterGenerator(settings)
        logger.info(f"📰 Generating newsletter on '{request.topic}'")

        try:
            draft = await generator.generate_newsletter(
                request, multi_persona=multi_persona, quality_gate=quality_gate
            )
        except NewsletterGenerationError as e:
            logger.error(f"❌ {e}")
            if ctx.obj.get("debug"):
                raise
            sys.exit(1)

        click.echo(f"\n📰 {draft.title}\n")
        click.echo(f"Mode: {draft.generation_mode} ({draft.processing_time:.1f}s)")
        click.echo(f"Steps: {' → '.join(draft.processing_steps)}")
        if draft.quality_metrics:
            m = draft.quality_metrics
            click.echo(f"Quality: {m.overall}/10 (confidence {m.confidence}%)")
        for warning in draft.warnings:
            click.echo(f"⚠️  {warning}")
        for error in draft.errors:
            click.echo(f"❌ {error}")

        if output:
            Path(output).write_text(
                f"# {draft.title}\n\n{draft.content}\n", encoding="utf-8"
            )
            click.echo(f"\n💾 Saved to {output}")
        else:
            preview = draft.content[:500]
            click.echo(f"\n{preview}{'...' if len(draft.content) > 500 else ''}")

    asyncio.run(_generate())


@cli.command()
def health() -> None:
    """Check configuration and the completion provider connection."""
    from newsletter_agent.core.newsletter import NewsletterGenerator
    from newsletter_agent.models.settings import Settings

    settings = Settings()
    logger.info("🔍 Checking system health...")
    logger.info(f"   - Debug mode: {settings.debug}")
    logger.info(f"   - Log level: {settings.log_level}")

    if not settings.openrouter_api_key:
        logger.warning("⚠️  OPENROUTER_API_KEY missing - generation is unavailable")
        return

    try:
        generator = NewsletterGenerator(settings)
        connections = asyncio.run(generator.test_connections())
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.warning(f"Network error during connection testing: {e}")
        return

    for service, status in connections.items():
        status_icon = "✅" if status else "❌"
        logger.info(f"   - {service.title()}: {status_icon}")

    if all(connections.values()):
        logger.info("✅ System healthy")
    else:
        logger.warning("⚠️  Completion provider unreachable")


@cli.command()
def config() -> None:
    """Display current configuration (without sensitive values)."""
    try:
        from newsletter_agent.models.settings import Settings

        settings = Settings()

        click.echo("\n📋 Newsletter Agent Configuration\n")
        click.echo(f"Debug Mode: {settings.debug}")
        click.echo(f"Log Level: {settings.log_level}")

        click.echo("\n🔑 API Keys:")
        status = "✅ Configured" if settings.openrouter_api_key else "❌ Missing"
        click.echo(f"  OpenRouter: {status}")

        click.echo("\n⚙️  Generation:")
        click.echo(f"  Model: {settings.openrouter_model or 'default fallback list'}")
        click.echo(f"  Completion timeout: {settings.completion_timeout:.0f}s")
        click.echo(f"  Max concurrent requests: {settings.max_concurrent_requests}")
        click.echo(f"  Summary input limit: {settings.summary_input_limit} chars")
        click.echo(f"  Quality gate by default: {settings.quality_gate_enabled}")

    except (KeyError, AttributeError, ValueError, TypeError) as e:
        click.echo(f"❌ Configuration data error: {e}")
        raise


@cli.command()
def personas() -> None:
    """List generation personas and their prior confidence."""
    from newsletter_agent.agents.personas import CONFLICT_RESOLUTION_ORDER, PERSONAS

    click.echo("\n🎭 Personas:\n")
    for persona in PERSONAS.values():
        click.echo(f"  {persona.persona.value}: {persona.prior_confidence}%")
        click.echo(f"    {persona.description}")

    click.echo("\n⚖️  Conflict resolution order:")
    for i, rule in enumerate(CONFLICT_RESOLUTION_ORDER, 1):
        click.echo(f"  {i}. {rule}")


if __name__ == "__main__":
    cli()
