from django.db import models
from django.conf import settings


class AuditLog(models.Model):
    """Model for tracking writes made through the admin API"""
    ACTION_CREATE = 'CREATE'
    ACTION_UPDATE = 'UPDATE'
    ACTION_DELETE = 'DELETE'
    ACTION_LOGIN = 'LOGIN'
    ACTION_CHOICES = [
        (ACTION_CREATE, 'Create'),
        (ACTION_UPDATE, 'Update'),
        (ACTION_DELETE, 'Delete'),
        (ACTION_LOGIN, 'Login'),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True
    )
    action = models.CharField(max_length=20, choices=ACTION_CHOICES)
    model_name = models.CharField(max_length=100)
    object_id = models.CharField(max_length=100, blank=True, null=True)
    details = models.JSONField(default=dict, blank=True)
    ip_address = models.GenericIPAddressField(blank=True, null=True)
    user_agent = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['created_at'], name='audit_created_idx'),
            models.Index(fields=['user', 'created_at'], name='audit_user_created_idx'),
            models.Index(fields=['action', 'created_at'], name='audit_action_created_idx'),
        ]

    def __str__(self):
        return f"{self.user} - {self.action} - {self.model_name} at {self.created_at}"


class AnalyticsEvent(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='analytics_events'
    )
    event_type = models.CharField(max_length=50)
    event_name = models.CharField(max_length=100)
    properties = models.JSONField(default=dict, blank=True)
    value = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True)
    currency = models.CharField(max_length=3, blank=True)
    ip_address = models.GenericIPAddressField(blank=True, null=True)
    user_agent = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'created_at'], name='event_user_created_idx'),
            models.Index(fields=['event_type', 'created_at'], name='event_type_created_idx'),
        ]

    def __str__(self):
        return f"{self.event_type}:{self.event_name} by {self.user_id}"
