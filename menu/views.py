from core.exceptions import NotFound
from core.resources import AuthorizedResourceViewSet, parse_id
from core.scope import DISH, RESTAURANT, build_scope
from restaurants.models import Restaurant

from .models import Dish
from .serializers import DishSerializer, DishWriteSerializer


class DishViewSet(AuthorizedResourceViewSet):
    """Dish management, scoped through the owning restaurant"""
    resource = DISH
    label = 'Dish'
    queryset = Dish.objects.with_details()
    serializer_class = DishSerializer
    write_serializer_class = DishWriteSerializer
    required_fields = ('name', 'price', 'restaurant_id')
    filterset_fields = ['is_active', 'is_available', 'cuisine']
    search_fields = ['name', 'description', 'restaurant__name']

    def get_parent_id(self):
        if self.action != 'list':
            return None
        restaurant_id = self.request.query_params.get('restaurant_id')
        if restaurant_id in (None, ''):
            return None
        return parse_id(restaurant_id, 'restaurant_id')

    def prepare_create(self, validated_data):
        restaurant_id = validated_data.pop('restaurant_id')
        # The new dish is a child row, but its restaurant must be in scope
        restaurant = Restaurant.objects.filter(
            build_scope(self.principal, RESTAURANT)).filter(pk=restaurant_id).first()
        if restaurant is None:
            raise NotFound('Restaurant not found')
        return {'restaurant': restaurant}
