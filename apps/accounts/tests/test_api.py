import pytest
from unittest.mock import patch
from django.urls import reverse
from rest_framework import status
from apps.accounts.memory import MemoryStore
from apps.accounts.models import User


# =============================================================================
# Registration Form Tests
# =============================================================================

@pytest.mark.django_db
class TestRegistrationForm:
    """Tests for GET /api/auth/register/"""

    def test_form_description(self, api_client):
        """Anonymous users get the registration form."""
        url = reverse('accounts:register')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['outcome'] == 'form_rendered'

        form = response.data['form']
        assert form['action'] == url
        assert form['submit'] == 'Register'
        assert [field['name'] for field in form['fields']] == ['email', 'fullname']
        assert form['fields'][0]['type'] == 'email'
        assert all(field['required'] for field in form['fields'])

    def test_form_hidden_when_registration_closed(self, api_client):
        MemoryStore().put('site.registrable', False)

        response = api_client.get(reverse('accounts:register'))

        assert response.status_code == status.HTTP_403_FORBIDDEN


# =============================================================================
# Registration Tests
# =============================================================================

@pytest.mark.django_db
class TestRegistration:
    """Tests for POST /api/auth/register/"""

    def test_register_success(self, api_client, mailoutbox):
        """Successfully register a new user and mail the password."""
        url = reverse('accounts:register')
        data = {
            'email': 'newuser@example.com',
            'fullname': 'New User',
        }
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['outcome'] == 'created'
        assert 'message' in response.data

        user = User.objects.get(email='newuser@example.com')
        assert list(user.roles.values_list('id', flat=True)) == [2]
        assert len(mailoutbox) == 1
        assert mailoutbox[0].to == ['New User <newuser@example.com>']

    def test_register_ignores_submitted_password(self, api_client, mailoutbox):
        """Passwords are always generated, never taken from input."""
        url = reverse('accounts:register')
        data = {
            'email': 'sneaky@example.com',
            'fullname': 'Sneaky',
            'password': 'ChosenPass123!',
        }
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        user = User.objects.get(email='sneaky@example.com')
        assert not user.check_password('ChosenPass123!')

    def test_register_without_mail_sent(self, api_client, settings, mailoutbox):
        """Account is created even when no mail goes out."""
        settings.EMAIL_PRETEND = True
        url = reverse('accounts:register')
        data = {
            'email': 'quiet@example.com',
            'fullname': 'Quiet User',
        }
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['outcome'] == 'created_without_notification'
        assert User.objects.filter(email='quiet@example.com').exists()
        assert len(mailoutbox) == 0

    def test_register_with_queue(self, api_client, mailoutbox):
        """Queued delivery is reported as created."""
        MemoryStore().put('email.queue', True)
        url = reverse('accounts:register')
        data = {
            'email': 'queued@example.com',
            'fullname': 'Queued User',
        }

        with patch('apps.accounts.tasks.send_queued_mail.delay') as delay:
            response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['outcome'] == 'created'
        delay.assert_called_once()
        assert len(mailoutbox) == 0

    def test_register_duplicate_email(self, api_client, user):
        """Cannot register with existing email."""
        url = reverse('accounts:register')
        data = {
            'email': user.email,
            'fullname': 'Duplicate',
        }
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['outcome'] == 'validation_failed'
        assert 'email' in response.data['errors']

    def test_register_invalid_email(self, api_client):
        """Registration fails with invalid email format."""
        url = reverse('accounts:register')
        data = {
            'email': 'not-an-email',
            'fullname': 'Someone',
        }
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'email' in response.data['errors']
        assert User.objects.count() == 0

    def test_register_missing_fullname(self, api_client):
        url = reverse('accounts:register')
        response = api_client.post(url, {'email': 'a@b.com'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'fullname' in response.data['errors']

    def test_register_creation_failure(self, api_client, settings):
        """Persistence errors come back as creation_failed."""
        settings.ACCOUNTS_MEMBER_ROLE = 999
        url = reverse('accounts:register')
        data = {
            'email': 'broken@example.com',
            'fullname': 'Broken Role',
        }
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['outcome'] == 'creation_failed'
        assert response.data['error'].startswith('Registration failed:')
        assert User.objects.count() == 0

    def test_register_closed(self, api_client):
        """No account is created while registration is disabled."""
        MemoryStore().put('site.registrable', False)
        url = reverse('accounts:register')
        data = {
            'email': 'late@example.com',
            'fullname': 'Too Late',
        }
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['detail'] == 'Registration is currently closed.'
        assert User.objects.count() == 0


# =============================================================================
# Health Check Tests
# =============================================================================

@pytest.mark.django_db
def test_health_check(client):
    response = client.get(reverse('health-check'))

    assert response.status_code == 200
    assert response.json() == {'status': 'ok'}
