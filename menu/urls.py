from rest_framework.routers import SimpleRouter
from . import views

router = SimpleRouter()
router.register(r'dishes', views.DishViewSet, basename='dish')

urlpatterns = router.urls
