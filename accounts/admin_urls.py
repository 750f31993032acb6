from rest_framework.routers import SimpleRouter
from . import views

router = SimpleRouter()
router.register(r'users', views.UserAdminViewSet, basename='admin-user')

urlpatterns = router.urls
