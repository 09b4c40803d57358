"""Effect components: temporary attachments with a time limit."""

from .hint import Hint

__all__ = ["Hint"]
