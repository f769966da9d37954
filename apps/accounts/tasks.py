"""Background tasks for the accounts app."""

from celery import shared_task

from .mail import Mailer, Message
from .memory import MemoryStore


@shared_task(name='accounts.send_queued_mail', ignore_result=True)
def send_queued_mail(template: str, data: dict, envelope: dict) -> int:
    """Deliver a mail queued by Mailer.queue. Returns the number of messages sent."""
    mailer = Mailer(MemoryStore())
    sent = mailer.deliver(template, data, Message.from_dict(envelope))
    return len(sent)
