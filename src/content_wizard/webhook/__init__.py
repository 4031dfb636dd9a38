"""Webhook tool client (SEO data functions behind one POST endpoint)."""

from content_wizard.webhook.client import WebhookClient

__all__ = ["WebhookClient"]
