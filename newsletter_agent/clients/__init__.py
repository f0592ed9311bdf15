"""Completion provider clients."""

from newsletter_agent.clients.gateway import CompletionGateway
from newsletter_agent.clients.openrouter import OpenRouterClient

__all__ = ["CompletionGateway", "OpenRouterClient"]
