"""castdesk: studio/talent messaging and casting-call invitations."""

from castdesk.messaging.models import Party

__all__ = ["Party"]
__version__ = "0.1.0"
