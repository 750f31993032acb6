# core/admin.py
from django.contrib import admin

from .models import AnalyticsEvent, AuditLog


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    """Read-only view of writes made through the admin API"""
    list_display = ['created_at', 'action', 'model_name', 'object_id', 'user', 'ip_address']
    list_filter = ['action', 'model_name']
    search_fields = ['user__email', 'model_name', 'object_id']
    raw_id_fields = ['user']
    date_hierarchy = 'created_at'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(AnalyticsEvent)
class AnalyticsEventAdmin(admin.ModelAdmin):
    list_display = ['event_type', 'event_name', 'user', 'value', 'currency', 'created_at']
    list_filter = ['event_type', 'created_at']
    search_fields = ['event_name', 'user__email']
    readonly_fields = ['created_at']
