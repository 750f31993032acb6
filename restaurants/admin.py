# restaurants/admin.py
from django.contrib import admin
from .models import Restaurant, RestaurantCuisine


class RestaurantCuisineInline(admin.TabularInline):
    model = RestaurantCuisine
    extra = 1
    fields = ['cuisine', 'position']


@admin.register(Restaurant)
class RestaurantAdmin(admin.ModelAdmin):
    """Admin interface for Restaurant model"""
    list_display = ['name', 'owner', 'price_range', 'dish_count', 'is_active', 'created_at']
    list_filter = ['is_active', 'price_range', 'created_at']
    search_fields = ['name', 'description', 'address', 'owner__email']
    list_editable = ['is_active']
    raw_id_fields = ['owner']
    inlines = [RestaurantCuisineInline]

    fieldsets = (
        ('Basic Information', {
            'fields': ('owner', 'name', 'description', 'price_range')
        }),
        ('Location', {
            'fields': ('address', 'lat', 'lng')
        }),
        ('Contact', {
            'fields': ('phone', 'website', 'email')
        }),
        ('Status', {
            'fields': ('is_active', 'created_at', 'updated_at')
        }),
    )

    readonly_fields = ['created_at', 'updated_at']

    def get_queryset(self, request):
        return super().get_queryset(request).with_details()

    def dish_count(self, obj):
        return obj.dish_count
    dish_count.short_description = 'Dishes'
    dish_count.admin_order_field = 'dish_count'
