from rest_framework import serializers
from rest_framework.validators import UniqueValidator
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Flat user record, safe to hand to templates and queued tasks."""

    roles = serializers.PrimaryKeyRelatedField(many=True, read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'fullname',
            'roles',
            'is_active',
            'created_at',
        ]
        read_only_fields = fields


class UserRegistrationSerializer(serializers.Serializer):
    """Rules for the ``register`` validation set."""

    email = serializers.EmailField(
        required=True,
        max_length=255,
        validators=[
            UniqueValidator(
                queryset=User.objects.all(),
                lookup='iexact',
                message='A user with this email already exists.',
            )
        ],
    )
    fullname = serializers.CharField(
        required=True,
        max_length=100,
        trim_whitespace=True,
    )

    def validate_email(self, value):
        """Store emails the way UserManager normalizes them."""
        return User.objects.normalize_email(value)
