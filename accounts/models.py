from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone


class Role(models.TextChoices):
    ADMIN = 'admin', 'Admin'
    RESTAURANT_OWNER = 'restaurant_owner', 'Restaurant Owner'
    USER = 'user', 'User'


class SubscriptionTier(models.TextChoices):
    FREE = 'free', 'Free'
    PLUS = 'plus', 'Plus'


class CustomUser(AbstractUser):
    role = models.CharField(
        max_length=20, choices=Role.choices, default=Role.USER)
    email = models.EmailField(unique=True)
    name = models.CharField(max_length=255, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    email_verified = models.BooleanField(default=False)
    phone_verified = models.BooleanField(default=False)
    onboarding_completed = models.BooleanField(default=False)
    subscription_tier = models.CharField(
        max_length=10, choices=SubscriptionTier.choices,
        default=SubscriptionTier.FREE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.email} ({self.get_role_display()})"


class OTPVerification(models.Model):
    TYPE_EMAIL = 'email'
    TYPE_PHONE = 'phone'
    TYPE_CHOICES = [
        (TYPE_EMAIL, 'Email'),
        (TYPE_PHONE, 'Phone'),
    ]

    identifier = models.CharField(max_length=255)
    code = models.CharField(max_length=6)
    type = models.CharField(max_length=10, choices=TYPE_CHOICES)
    used = models.BooleanField(default=False)
    expires_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['identifier', 'type', 'used'], name='otp_lookup_idx'),
        ]

    def __str__(self):
        return f"{self.type} code for {self.identifier}"

    @property
    def is_expired(self):
        return self.expires_at <= timezone.now()
