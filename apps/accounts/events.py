"""
Account lifecycle events.

Other apps extend the registration flow by connecting to ``account_event``
and filtering on ``topic``::

    @receiver(account_event)
    def on_account_event(sender, topic, payload, **kwargs):
        if topic == 'created: user.account':
            ...
"""

from django.dispatch import Signal
import structlog

logger = structlog.get_logger(__name__)

# Sent with keyword arguments ``topic`` (str) and ``payload`` (list).
account_event = Signal()


class EventNotifier:
    """Fire-and-forget publisher for account events."""

    def __init__(self, signal: Signal = account_event):
        self.signal = signal

    def publish(self, topic: str, payload: list) -> None:
        responses = self.signal.send_robust(
            sender=self.__class__,
            topic=topic,
            payload=payload,
        )

        for receiver, response in responses:
            if isinstance(response, Exception):
                logger.warning(
                    "event_subscriber_failed",
                    topic=topic,
                    receiver=getattr(receiver, '__qualname__', repr(receiver)),
                    error=str(response),
                )
