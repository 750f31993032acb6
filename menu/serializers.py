from rest_framework import serializers

from core.serializers import NestedCollectionsMixin, StringListField
from .models import Dish


class DishSerializer(serializers.ModelSerializer):
    restaurant_id = serializers.IntegerField(read_only=True)
    restaurant_name = serializers.CharField(
        source='restaurant.name', read_only=True)
    ingredients = serializers.ListField(child=serializers.CharField(), read_only=True)
    dietary_tags = serializers.ListField(child=serializers.CharField(), read_only=True)

    class Meta:
        model = Dish
        fields = [
            'id', 'restaurant_id', 'restaurant_name', 'name', 'description',
            'image', 'price', 'cuisine', 'is_active', 'is_available',
            'ingredients', 'dietary_tags', 'allergens',
            'created_at', 'updated_at'
        ]
        read_only_fields = fields


class DishWriteSerializer(NestedCollectionsMixin, serializers.ModelSerializer):
    collections = {
        'ingredients': ('ingredient_rows', 'name'),
        'dietary_tags': ('dietary_tag_rows', 'tag'),
    }

    restaurant_id = serializers.IntegerField(write_only=True, required=False)
    ingredients = StringListField()
    dietary_tags = StringListField()
    allergens = serializers.ListField(
        child=serializers.CharField(max_length=100), required=False)

    class Meta:
        model = Dish
        fields = [
            'restaurant_id', 'name', 'description', 'image', 'price',
            'cuisine', 'is_active', 'is_available',
            'ingredients', 'dietary_tags', 'allergens'
        ]

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Name cannot be blank")
        return value

    def validate_price(self, value):
        if value < 0:
            raise serializers.ValidationError("Price cannot be negative")
        return value

    def validate(self, attrs):
        if self.instance is not None:
            # A dish never moves between restaurants
            attrs.pop('restaurant_id', None)
        return attrs
