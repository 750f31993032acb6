from django.contrib import admin
from django.test import RequestFactory

from core.models import AnalyticsEvent, AuditLog


def test_audit_log_is_read_only_in_admin(admin_user):
    model_admin = admin.site._registry[AuditLog]
    request = RequestFactory().get('/django-admin/core/auditlog/')
    request.user = admin_user

    assert not model_admin.has_add_permission(request)
    assert not model_admin.has_change_permission(request)


def test_analytics_events_are_registered():
    assert admin.site.is_registered(AnalyticsEvent)
