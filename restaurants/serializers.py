from django.contrib.auth import get_user_model
from rest_framework import serializers

from accounts.models import Role
from accounts.permissions import resolve_principal
from core.serializers import NestedCollectionsMixin, StringListField
from .models import Restaurant

User = get_user_model()


class OwnerSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'name', 'email']


class RestaurantSerializer(serializers.ModelSerializer):
    owner_id = serializers.IntegerField(read_only=True)
    owner = OwnerSummarySerializer(read_only=True)
    cuisines = serializers.ListField(child=serializers.CharField(), read_only=True)
    dish_count = serializers.SerializerMethodField()

    class Meta:
        model = Restaurant
        fields = [
            'id', 'owner_id', 'owner', 'name', 'description', 'address',
            'lat', 'lng', 'phone', 'website', 'email', 'price_range',
            'is_active', 'cuisines', 'dish_count', 'created_at', 'updated_at'
        ]
        read_only_fields = fields

    def get_dish_count(self, obj):
        count = getattr(obj, 'dish_count', None)
        return count if count is not None else obj.dishes.count()


class RestaurantWriteSerializer(NestedCollectionsMixin, serializers.ModelSerializer):
    collections = {'cuisines': ('cuisine_rows', 'cuisine')}

    owner_id = serializers.PrimaryKeyRelatedField(
        source='owner', queryset=User.objects.filter(role=Role.RESTAURANT_OWNER),
        allow_null=True, required=False)
    lat = serializers.FloatField(min_value=-90, max_value=90)
    lng = serializers.FloatField(min_value=-180, max_value=180)
    cuisines = StringListField()

    class Meta:
        model = Restaurant
        fields = [
            'owner_id', 'name', 'description', 'address', 'lat', 'lng',
            'phone', 'website', 'email', 'price_range', 'is_active', 'cuisines'
        ]

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Name cannot be blank")
        return value

    def validate(self, attrs):
        request = self.context.get('request')
        if request is not None and not resolve_principal(request).is_admin:
            # Only admins reassign ownership
            attrs.pop('owner', None)
        return attrs


class RestaurantDetailSerializer(RestaurantSerializer):
    dishes = serializers.SerializerMethodField()

    class Meta(RestaurantSerializer.Meta):
        fields = RestaurantSerializer.Meta.fields + ['dishes']
        read_only_fields = fields

    def get_dishes(self, obj):
        from menu.models import Dish
        from menu.serializers import DishSerializer

        dishes = Dish.objects.with_details().filter(restaurant=obj)
        return DishSerializer(dishes, many=True, context=self.context).data
