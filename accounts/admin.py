# accounts/admin.py
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from django.utils.translation import gettext_lazy as _
from .models import CustomUser, OTPVerification, Role


class CustomUserAdmin(UserAdmin):
    # Fields to display in list view
    list_display = ('email', 'name', 'role', 'subscription_tier',
                    'email_verified', 'is_active', 'created_at')

    # Filter options
    list_filter = ('role', 'is_active', 'subscription_tier',
                   'email_verified', 'is_staff')

    # Search fields
    search_fields = ('username', 'email', 'name', 'phone')

    # Fields to display in detail view
    fieldsets = (
        (None, {'fields': ('username', 'password')}),
        (_('Personal info'), {'fields': ('name', 'email', 'phone')}),
        (_('Account'), {'fields': ('role', 'subscription_tier', 'onboarding_completed',
                                   'email_verified', 'phone_verified')}),
        (_('Permissions'), {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        (_('Important dates'), {'fields': ('last_login', 'date_joined')}),
    )

    # Fields for add form
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('username', 'email', 'password1', 'password2', 'role',
                       'is_active', 'is_staff'),
        }),
    )

    ordering = ('-created_at',)

    actions = ['activate_users', 'deactivate_users',
               'make_restaurant_owner', 'make_user']

    def activate_users(self, request, queryset):
        updated = queryset.update(is_active=True)
        self.message_user(request, f"{updated} users activated.")
    activate_users.short_description = "Activate selected users"

    def deactivate_users(self, request, queryset):
        # Don't allow deactivating superusers
        updated = queryset.filter(is_superuser=False).update(is_active=False)
        self.message_user(request, f"{updated} users deactivated.")
    deactivate_users.short_description = "Deactivate selected users"

    def make_restaurant_owner(self, request, queryset):
        updated = queryset.update(role=Role.RESTAURANT_OWNER)
        self.message_user(request, f"{updated} users set as Restaurant Owner.")
    make_restaurant_owner.short_description = "Set as Restaurant Owner"

    def make_user(self, request, queryset):
        updated = queryset.filter(is_superuser=False).update(role=Role.USER)
        self.message_user(request, f"{updated} users set as User.")
    make_user.short_description = "Set as User"


@admin.register(OTPVerification)
class OTPVerificationAdmin(admin.ModelAdmin):
    list_display = ['identifier', 'type', 'used', 'is_expired', 'expires_at', 'created_at']
    list_filter = ['type', 'used']
    search_fields = ['identifier']
    readonly_fields = ['identifier', 'code', 'type', 'expires_at', 'created_at']

    def has_add_permission(self, request):
        return False


# Register the model
admin.site.register(CustomUser, CustomUserAdmin)
