"""
Templated e-mail delivery.

A mail is described by a template prefix, a context dict and a ``configure``
callback that fills in subject and recipients on a :class:`Message`. The
template prefix resolves to ``<prefix>.txt`` (body) and ``<prefix>.html``
(alternative).
"""

import smtplib
from email.utils import formataddr
from typing import Callable, List, Optional

from django.conf import settings
from django.core.mail import BadHeaderError, EmailMultiAlternatives
from django.template import TemplateDoesNotExist, TemplateSyntaxError
from django.template.loader import render_to_string
from kombu.exceptions import OperationalError
import structlog

logger = structlog.get_logger(__name__)


class Message:
    """Envelope details collected from a ``configure`` callback."""

    def __init__(self, subject: str = '', recipients: Optional[list] = None):
        self.subject_line = subject
        self.recipients = [tuple(recipient) for recipient in recipients or []]

    def subject(self, text) -> 'Message':
        self.subject_line = str(text)
        return self

    def to(self, address: str, name: Optional[str] = None) -> 'Message':
        self.recipients.append((address, name))
        return self

    def formatted_recipients(self) -> List[str]:
        return [
            formataddr((name, address)) if name else address
            for address, name in self.recipients
        ]

    def as_dict(self) -> dict:
        return {
            'subject': self.subject_line,
            'recipients': [list(recipient) for recipient in self.recipients],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Message':
        return cls(subject=data['subject'], recipients=data['recipients'])


class Mailer:
    """
    Send or queue templated mail.

    Args:
        memory: Settings store consulted for the ``email.queue`` flag
        from_email: Sender address (defaults to DEFAULT_FROM_EMAIL)
        pretend: Log instead of sending (defaults to EMAIL_PRETEND)
    """

    def __init__(self, memory, from_email: Optional[str] = None, pretend: Optional[bool] = None):
        self.memory = memory
        self.from_email = from_email or settings.DEFAULT_FROM_EMAIL
        if pretend is None:
            pretend = getattr(settings, 'EMAIL_PRETEND', False)
        self.pretend = pretend

    def push(self, template: str, data: dict, configure: Callable[[Message], None]) -> list:
        """Queue the mail when ``email.queue`` is enabled, otherwise send it now."""
        if self.memory.get('email.queue', False):
            return self.queue(template, data, configure)

        return self.send(template, data, configure)

    def send(self, template: str, data: dict, configure: Callable[[Message], None]) -> list:
        """
        Send immediately.

        Returns:
            List with the sent EmailMultiAlternatives, empty when nothing
            went out (pretend mode or transport failure)
        """
        message = Message()
        configure(message)
        return self.deliver(template, data, message)

    def queue(self, template: str, data: dict, configure: Callable[[Message], None]) -> list:
        """
        Hand the mail to the worker queue.

        ``data`` must be JSON serialisable. Nothing is sent inline, so the
        returned list is always empty, also when the broker is unreachable.
        """
        from .tasks import send_queued_mail

        message = Message()
        configure(message)

        try:
            send_queued_mail.delay(template, data, message.as_dict())
        except (OperationalError, OSError) as e:
            logger.error("mail_queue_failed", template=template, recipients=message.formatted_recipients(), error=str(e))
            return []

        logger.info("mail_queued", template=template, recipients=message.formatted_recipients())
        return []

    def compose(self, template: str, data: dict, message: Message) -> EmailMultiAlternatives:
        email = EmailMultiAlternatives(
            subject=message.subject_line,
            body=render_to_string(f'{template}.txt', data),
            from_email=self.from_email,
            to=message.formatted_recipients(),
        )
        email.attach_alternative(render_to_string(f'{template}.html', data), 'text/html')
        return email

    def deliver(self, template: str, data: dict, message: Message) -> list:
        try:
            email = self.compose(template, data, message)
        except (TemplateDoesNotExist, TemplateSyntaxError) as e:
            logger.error("mail_template_failed", template=template, error=str(e))
            return []

        if self.pretend:
            logger.info("mail_pretended", template=template, recipients=email.to)
            return []

        try:
            sent = email.send()
        except BadHeaderError as e:
            logger.error("mail_rejected", template=template, error=str(e))
            return []
        except (smtplib.SMTPException, OSError) as e:
            logger.error("mail_failed", template=template, recipients=email.to, error=str(e))
            return []

        if not sent:
            return []

        logger.info("mail_sent", template=template, recipients=email.to)
        return [email]
