"""User registration service."""

from django.conf import settings
from django.urls import reverse
from django.utils.crypto import get_random_string
from django.utils.translation import gettext as _
import structlog

from ..models import Role, User
from ..serializers import UserSerializer
from .exceptions import UserRegistrationError

logger = structlog.get_logger(__name__)

REGISTRATION_PASSWORD_LENGTH = 5
REGISTRATION_EMAIL_TEMPLATE = 'accounts/email/credential/register'
DEFAULT_SITE_NAME = 'Orchestra Platform'


class Registration:
    """
    Registration workflow: show the form, create the account, mail the
    generated password.

    Every public method reports exactly one outcome to the given listener
    and returns whatever the listener returns.
    """

    def __init__(self, *, presenter, validator, users, mailer, memory, notifier):
        self.presenter = presenter
        self.validator = validator
        self.users = users
        self.mailer = mailer
        self.memory = memory
        self.notifier = notifier

    def index(self, listener):
        """View registration form."""
        user = self.users.new_empty()

        form = self.presenter.profile(user, reverse('accounts:register'))
        form.submit = _('Register')

        self.notifier.publish('form: user.account', [user, form])

        return listener.index_succeed({'user': user, 'form': form})

    def create(self, listener, data: dict):
        """
        Create a new user with a generated password.

        Args:
            listener: RegistrationListener receiving the outcome
            data: Submitted ``email`` and ``fullname``
        """
        password = get_random_string(REGISTRATION_PASSWORD_LENGTH)

        validation = self.validator.validate('register', data)

        # Nothing is written when the input is rejected
        if validation.fails():
            return listener.create_validation_failed(validation.errors)

        try:
            user = self._create_user(validation.cleaned, password)
        except UserRegistrationError as e:
            logger.warning("registration_failed", email=validation.cleaned.get('email'), error=str(e))
            return listener.create_failed({'error': str(e)})

        logger.info("user_registered", user_id=str(user.id), email=user.email)

        return self.send_email(listener, user, password)

    def send_email(self, listener, user: User, password: str):
        """Send the new registration e-mail to the user."""
        site = self.memory.get('site.name', getattr(settings, 'SITE_NAME', DEFAULT_SITE_NAME))

        def configure(message):
            message.subject(_('Welcome to %(site)s') % {'site': site})
            message.to(user.email, user.fullname)

        # The account is committed at this point, so a mail failure only
        # downgrades the outcome
        try:
            # Plain data only so the mail can go through the worker queue
            data = {
                'password': password,
                'site': site,
                'user': dict(UserSerializer(user).data),
            }
            sent = self.mailer.push(REGISTRATION_EMAIL_TEMPLATE, data, configure)
        except Exception as e:
            logger.error("registration_mail_failed", user_id=str(user.id), error=str(e))
            sent = []

        if not self.memory.get('email.queue', False) and len(sent) < 1:
            logger.warning("registration_mail_not_sent", user_id=str(user.id))
            return listener.create_succeed_without_notification()

        return listener.create_succeed()

    def _create_user(self, cleaned: dict, password: str) -> User:
        """
        Build, save and assign the member role in one transaction.

        Raises:
            UserRegistrationError: If any step fails (nothing is persisted)
        """
        try:
            user = self.users.new_empty()
            user.email = cleaned['email']
            user.fullname = cleaned['fullname']
            user.set_password(password)

            self._fire_event('creating', user)
            self._fire_event('saving', user)

            with self.users.atomic():
                self.users.save(user)
                self.users.set_roles(user, [self._member_role()])

            self._fire_event('created', user)
            self._fire_event('saved', user)
        except Exception as e:
            raise UserRegistrationError(f"Registration failed: {str(e)}") from e

        return user

    def _member_role(self) -> int:
        return getattr(settings, 'ACCOUNTS_MEMBER_ROLE', Role.MEMBER)

    def _fire_event(self, kind: str, user: User) -> None:
        self.notifier.publish(f'{kind}: user.account', [user])
