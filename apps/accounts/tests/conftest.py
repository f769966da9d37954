import pytest
from unittest.mock import Mock
from rest_framework.test import APIClient
from apps.accounts.events import EventNotifier
from apps.accounts.mail import Mailer
from apps.accounts.memory import MemoryStore
from apps.accounts.models import Role, User
from apps.accounts.presenters import AccountPresenter
from apps.accounts.services import Registration, RegistrationOutcome, UserStore
from apps.accounts.validation import AccountValidator


class RecordingListener:
    """Listener double that records which outcome was reported."""

    def __init__(self):
        self.calls = []

    @property
    def outcomes(self):
        return [outcome for outcome, _ in self.calls]

    def _record(self, outcome, payload=None):
        self.calls.append((outcome, payload))
        return outcome

    def index_succeed(self, data):
        return self._record(RegistrationOutcome.FORM_RENDERED, data)

    def create_validation_failed(self, errors):
        return self._record(RegistrationOutcome.VALIDATION_FAILED, errors)

    def create_failed(self, data):
        return self._record(RegistrationOutcome.CREATION_FAILED, data)

    def create_succeed(self):
        return self._record(RegistrationOutcome.CREATED)

    def create_succeed_without_notification(self):
        return self._record(RegistrationOutcome.CREATED_WITHOUT_NOTIFICATION)


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def listener():
    return RecordingListener()


@pytest.fixture
def memory(db):
    """Return a settings store over the test database."""
    return MemoryStore()


@pytest.fixture
def notifier():
    """Return a notifier double that records published topics."""
    return Mock(spec=EventNotifier)


@pytest.fixture
def mailer(memory):
    """Return the real mailer (locmem backend under pytest-django)."""
    return Mailer(memory, from_email='no-reply@example.com', pretend=False)


@pytest.fixture
def make_registration(memory, notifier, mailer):
    """Factory for a Registration with overridable collaborators."""

    def _make(**overrides):
        collaborators = {
            'presenter': AccountPresenter(),
            'validator': AccountValidator(),
            'users': UserStore(),
            'mailer': mailer,
            'memory': memory,
            'notifier': notifier,
        }
        collaborators.update(overrides)
        return Registration(**collaborators)

    return _make


@pytest.fixture
def registration(make_registration):
    return make_registration()


@pytest.fixture
def registration_data():
    return {
        'email': 'a@b.com',
        'fullname': 'A B',
    }


@pytest.fixture
def member_role(db):
    """The member role seeded by migrations."""
    return Role.objects.get(id=Role.MEMBER)


@pytest.fixture
def user(db, member_role):
    """Create and return an existing member."""
    user = User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        fullname='Test User',
    )
    user.roles.add(member_role)
    return user
