from rest_framework import serializers
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password

from .models import OTPVerification, Role, SubscriptionTier

User = get_user_model()

REGISTRATION_ROLES = {
    'customer': Role.USER,
    'restaurant_owner': Role.RESTAURANT_OWNER,
}


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'name', 'role', 'phone',
                  'email_verified', 'phone_verified', 'onboarding_completed',
                  'subscription_tier', 'is_active', 'created_at', 'updated_at',
                  'last_login']
        read_only_fields = fields


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6)
    name = serializers.CharField(min_length=2, max_length=255)
    role = serializers.ChoiceField(
        choices=list(REGISTRATION_ROLES), default='customer')
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)

    def validate_email(self, value):
        return User.objects.normalize_email(value).lower()

    def validate(self, attrs):
        candidate = User(email=attrs['email'], name=attrs['name'])
        validate_password(attrs['password'], user=candidate)
        return attrs

    def create(self, validated_data):
        role = REGISTRATION_ROLES[validated_data['role']]
        is_owner = role == Role.RESTAURANT_OWNER
        phone = validated_data.get('phone', '')
        return User.objects.create_user(
            username=validated_data['email'],
            email=validated_data['email'],
            password=validated_data['password'],
            name=validated_data['name'],
            phone=phone,
            role=role,
            phone_verified=bool(phone),
            onboarding_completed=is_owner,
            subscription_tier=SubscriptionTier.PLUS if is_owner else SubscriptionTier.FREE,
        )


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField(required=True)
    password = serializers.CharField(required=True, write_only=True)


class ChangePasswordSerializer(serializers.Serializer):
    old_password = serializers.CharField(required=True)
    new_password = serializers.CharField(required=True)

    def validate_new_password(self, value):
        user = self.context['request'].user
        validate_password(value, user=user)
        return value


class UpdateProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['name', 'phone']


class RoleAssignmentSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=Role.choices, required=True)


class OTPResendSerializer(serializers.Serializer):
    identifier = serializers.CharField(max_length=255)
    type = serializers.ChoiceField(choices=OTPVerification.TYPE_CHOICES)


class OTPVerifySerializer(OTPResendSerializer):
    code = serializers.RegexField(r'^\d{6}$', error_messages={
        'invalid': 'Code must be 6 digits'})
