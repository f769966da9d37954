from rest_framework import status, serializers
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from django.utils.translation import gettext as _
from drf_spectacular.utils import extend_schema, inline_serializer

from .events import EventNotifier
from .mail import Mailer
from .memory import MemoryStore
from .permissions import IsRegistrationOpen
from .presenters import AccountPresenter
from .services import Registration, RegistrationOutcome, UserStore
from .serializers import UserRegistrationSerializer
from .validation import AccountValidator


# Response serializers for API documentation
class FormFieldSerializer(serializers.Serializer):
    name = serializers.CharField()
    label = serializers.CharField()
    type = serializers.CharField()
    required = serializers.BooleanField()
    value = serializers.CharField(allow_blank=True)


class FormResponseSerializer(serializers.Serializer):
    outcome = serializers.CharField()
    form = inline_serializer(
        name='RegistrationForm',
        fields={
            'action': serializers.CharField(),
            'submit': serializers.CharField(),
            'fields': FormFieldSerializer(many=True),
        },
    )


class OutcomeResponseSerializer(serializers.Serializer):
    outcome = serializers.CharField()
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    outcome = serializers.CharField()
    error = serializers.CharField(required=False)
    errors = serializers.DictField(required=False)


class RegistrationView(APIView):
    """
    Public registration endpoint.

    GET  /api/auth/register/  describe the registration form
    POST /api/auth/register/  create an account; the password is e-mailed

    The view is the listener of the Registration workflow: each listener
    method turns one outcome into a response.
    """

    authentication_classes = []
    permission_classes = [AllowAny, IsRegistrationOpen]

    def initial(self, request, *args, **kwargs):
        self.memory = MemoryStore()
        super().initial(request, *args, **kwargs)

    def get_processor(self) -> Registration:
        return Registration(
            presenter=AccountPresenter(),
            validator=AccountValidator(),
            users=UserStore(),
            mailer=Mailer(self.memory),
            memory=self.memory,
            notifier=EventNotifier(),
        )

    @extend_schema(
        responses={200: FormResponseSerializer, 403: ErrorResponseSerializer},
        description="Describe the registration form.",
        tags=['auth'],
    )
    def get(self, request):
        return self.get_processor().index(self)

    @extend_schema(
        request=UserRegistrationSerializer,
        responses={
            201: OutcomeResponseSerializer,
            400: ErrorResponseSerializer,
            403: ErrorResponseSerializer,
        },
        description="Register a new account. A generated password is sent by e-mail.",
        tags=['auth'],
    )
    def post(self, request):
        return self.get_processor().create(self, request.data)

    # Listener callbacks

    def index_succeed(self, data):
        return Response({
            'outcome': RegistrationOutcome.FORM_RENDERED.value,
            'form': data['form'].describe(),
        })

    def create_validation_failed(self, errors):
        return Response({
            'outcome': RegistrationOutcome.VALIDATION_FAILED.value,
            'errors': errors,
        }, status=status.HTTP_400_BAD_REQUEST)

    def create_failed(self, data):
        return Response({
            'outcome': RegistrationOutcome.CREATION_FAILED.value,
            'error': data['error'],
        }, status=status.HTTP_400_BAD_REQUEST)

    def create_succeed(self):
        return Response({
            'outcome': RegistrationOutcome.CREATED.value,
            'message': _('Thank you for registering, please check your e-mail for your password.'),
        }, status=status.HTTP_201_CREATED)

    def create_succeed_without_notification(self):
        return Response({
            'outcome': RegistrationOutcome.CREATED_WITHOUT_NOTIFICATION.value,
            'message': _('Your account has been created but we were unable to e-mail your password. '
                         'Please contact the site administrator.'),
        }, status=status.HTTP_201_CREATED)
