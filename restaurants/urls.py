from rest_framework.routers import SimpleRouter
from . import views

router = SimpleRouter()
router.register(r'restaurants', views.RestaurantViewSet, basename='restaurant')

urlpatterns = router.urls
