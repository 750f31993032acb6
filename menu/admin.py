# menu/admin.py
from django.contrib import admin
from django.utils.html import format_html
from .models import Dish, DishDietaryTag, DishIngredient


class DishIngredientInline(admin.TabularInline):
    model = DishIngredient
    extra = 1
    fields = ['name', 'position']


class DishDietaryTagInline(admin.TabularInline):
    model = DishDietaryTag
    extra = 1
    fields = ['tag', 'position']


@admin.register(Dish)
class DishAdmin(admin.ModelAdmin):
    """Admin interface for Dish model"""
    list_display = [
        'name',
        'restaurant_display',
        'price_display',
        'cuisine',
        'is_available',
        'is_active',
        'created_at'
    ]

    list_filter = ['is_active', 'is_available', 'cuisine', 'restaurant']
    search_fields = ['name', 'description', 'restaurant__name']
    list_editable = ['is_available', 'is_active']
    inlines = [DishIngredientInline, DishDietaryTagInline]

    fieldsets = (
        ('Basic Information', {
            'fields': ('restaurant', 'name', 'description', 'cuisine')
        }),
        ('Pricing & Media', {
            'fields': ('price', 'image', 'allergens')
        }),
        ('Availability', {
            'fields': ('is_active', 'is_available')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    readonly_fields = ['created_at', 'updated_at']

    actions = ['mark_available', 'mark_unavailable']

    def restaurant_display(self, obj):
        return obj.restaurant.name
    restaurant_display.short_description = 'Restaurant'
    restaurant_display.admin_order_field = 'restaurant__name'

    def price_display(self, obj):
        return format_html('<strong>${}</strong>', obj.price)
    price_display.short_description = 'Price'
    price_display.admin_order_field = 'price'

    def mark_available(self, request, queryset):
        updated = queryset.update(is_available=True)
        self.message_user(request, f"Marked {updated} dishes as available.")
    mark_available.short_description = "Mark selected dishes as available"

    def mark_unavailable(self, request, queryset):
        updated = queryset.update(is_available=False)
        self.message_user(request, f"Marked {updated} dishes as unavailable.")
    mark_unavailable.short_description = "Mark selected dishes as unavailable"
