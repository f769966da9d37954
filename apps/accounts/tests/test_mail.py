import pytest
from unittest.mock import patch
from kombu.exceptions import OperationalError

from apps.accounts.mail import Mailer, Message
from apps.accounts.tasks import send_queued_mail


TEMPLATE = 'accounts/email/credential/register'


@pytest.fixture
def mail_data():
    return {
        'password': 'abc12',
        'site': 'Acme',
        'user': {'email': 'jane@example.com', 'fullname': 'Jane Doe'},
    }


def configure(message):
    message.subject('Welcome to Acme')
    message.to('jane@example.com', 'Jane Doe')


class TestMessage:
    """Tests for the Message envelope."""

    def test_recipients_with_and_without_name(self):
        message = Message()
        message.to('jane@example.com', 'Jane Doe').to('ops@example.com')

        assert message.formatted_recipients() == [
            'Jane Doe <jane@example.com>',
            'ops@example.com',
        ]

    def test_envelope_survives_dict_conversion(self):
        message = Message().subject('Hi').to('jane@example.com', 'Jane Doe')

        restored = Message.from_dict(message.as_dict())

        assert restored.subject_line == 'Hi'
        assert restored.recipients == [('jane@example.com', 'Jane Doe')]


@pytest.mark.django_db
class TestMailer:
    """Tests for Mailer.push / send / queue."""

    def test_send_delivers_rendered_templates(self, mailer, mail_data, mailoutbox):
        sent = mailer.push(TEMPLATE, mail_data, configure)

        assert len(sent) == 1
        assert len(mailoutbox) == 1

        mail = mailoutbox[0]
        assert mail.subject == 'Welcome to Acme'
        assert mail.from_email == 'no-reply@example.com'
        assert mail.to == ['Jane Doe <jane@example.com>']
        assert 'Hello Jane Doe,' in mail.body
        assert 'abc12' in mail.body

        html, mimetype = mail.alternatives[0]
        assert mimetype == 'text/html'
        assert '<code>abc12</code>' in html

    def test_pretend_mode_sends_nothing(self, memory, mail_data, mailoutbox):
        mailer = Mailer(memory, pretend=True)

        sent = mailer.push(TEMPLATE, mail_data, configure)

        assert sent == []
        assert len(mailoutbox) == 0

    def test_pretend_defaults_to_setting(self, settings, memory):
        settings.EMAIL_PRETEND = True

        assert Mailer(memory).pretend is True

    def test_queue_flag_hands_mail_to_worker(self, mailer, memory, mail_data, mailoutbox):
        memory.put('email.queue', True)

        with patch('apps.accounts.tasks.send_queued_mail.delay') as delay:
            sent = mailer.push(TEMPLATE, mail_data, configure)

        assert sent == []
        assert len(mailoutbox) == 0
        delay.assert_called_once_with(TEMPLATE, mail_data, {
            'subject': 'Welcome to Acme',
            'recipients': [['jane@example.com', 'Jane Doe']],
        })

    def test_queued_task_delivers_mail(self, mail_data, mailoutbox):
        count = send_queued_mail(TEMPLATE, mail_data, {
            'subject': 'Welcome to Acme',
            'recipients': [['jane@example.com', 'Jane Doe']],
        })

        assert count == 1
        assert mailoutbox[0].to == ['Jane Doe <jane@example.com>']
        assert 'abc12' in mailoutbox[0].body

    def test_header_injection_sends_nothing(self, mailer, mail_data, mailoutbox):
        def configure_injected(message):
            message.subject('Welcome\nBcc: x@evil.com')
            message.to('jane@example.com', 'Jane Doe')

        sent = mailer.push(TEMPLATE, mail_data, configure_injected)

        assert sent == []
        assert len(mailoutbox) == 0

    def test_missing_template_sends_nothing(self, mailer, mail_data, mailoutbox):
        sent = mailer.push('accounts/email/credential/missing', mail_data, configure)

        assert sent == []
        assert len(mailoutbox) == 0

    def test_unreachable_broker_queues_nothing(self, mailer, memory, mail_data, mailoutbox):
        memory.put('email.queue', True)

        with patch(
            'apps.accounts.tasks.send_queued_mail.delay',
            side_effect=OperationalError('Error 111 connecting to localhost:6379'),
        ) as delay:
            sent = mailer.push(TEMPLATE, mail_data, configure)

        assert sent == []
        assert len(mailoutbox) == 0
        delay.assert_called_once()
