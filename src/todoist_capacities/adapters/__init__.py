"""Hosting adapters that feed raw requests into the webhook relay."""

from todoist_capacities.config import RelayConfig
from todoist_capacities.relay import WebhookRelay
from todoist_capacities.utils.logger import configure_level


def build_relay(config: RelayConfig | None = None, client=None) -> WebhookRelay:
    """Create a relay from *config*, or from the process environment."""
    if config is None:
        config = RelayConfig.from_env()
    configure_level(config.log_level)
    return WebhookRelay(config, client=client)
