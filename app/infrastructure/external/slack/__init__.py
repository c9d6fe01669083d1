"""Slack Web API client."""

from app.infrastructure.external.slack.client import SlackClient

__all__ = ["SlackClient"]
