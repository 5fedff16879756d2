"""Chat notification module."""
from .slack import SlackNotifier

__all__ = ["SlackNotifier"]
