from core.resources import AuthorizedResourceViewSet
from core.scope import RESTAURANT

from .models import Restaurant
from .serializers import (
    RestaurantSerializer, RestaurantDetailSerializer, RestaurantWriteSerializer
)


class RestaurantViewSet(AuthorizedResourceViewSet):
    """Restaurant management for admins and restaurant owners"""
    resource = RESTAURANT
    label = 'Restaurant'
    queryset = Restaurant.objects.with_details()
    serializer_class = RestaurantSerializer
    detail_serializer_class = RestaurantDetailSerializer
    write_serializer_class = RestaurantWriteSerializer
    required_fields = ('name', 'address', 'lat', 'lng')
    filterset_fields = ['is_active', 'price_range']
    search_fields = ['name', 'description', 'address']

    def prepare_create(self, validated_data):
        principal = self.principal
        if principal.is_restaurant_owner:
            return {'owner_id': principal.id}
        # Admin-created restaurants are platform-managed unless owner_id was sent
        return {}
