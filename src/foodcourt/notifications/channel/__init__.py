"""Outbound channels for customer notifications.

Provides singleton access to channel adapters. Only email is wired; the
fake adapter records messages in memory and is the default everywhere,
since real delivery is handled by an external mail relay.
"""

import os
from enum import Enum

_channel_instances: dict[str, object] = {}

DEFAULT_SENDER = "orders@foodcourt.local"


class NotificationChannel(Enum):
    EMAIL = "Email"


def get_channel(channel_type: str):
    """Adapter for the given channel, built once and then reused.

    Args:
        channel_type: One of NotificationChannel enum values ("Email")
    """
    if channel_type not in _channel_instances:
        if channel_type == NotificationChannel.EMAIL.value:
            from foodcourt.notifications.channel.fake_email import FakeEmailAdapter

            _channel_instances[channel_type] = FakeEmailAdapter(
                sender=os.environ.get("FOODCOURT_EMAIL_SENDER", DEFAULT_SENDER),
            )
        else:
            raise ValueError(f"Unknown channel type: {channel_type}")

    return _channel_instances[channel_type]


def reset_channels():
    """Drop cached adapters so the next lookup builds fresh ones."""
    _channel_instances.clear()
