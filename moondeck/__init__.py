"""Stream helper process and shared settings, pairing, heartbeat and logging utilities."""

__version__ = "1.0.0"