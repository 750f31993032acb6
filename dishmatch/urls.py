# dishmatch/urls.py
from django.contrib import admin
from django.urls import path, include

from core.urls import admin_urlpatterns

urlpatterns = [
    # Django Admin
    path('django-admin/', admin.site.urls),

    # ============ API ENDPOINTS ============
    path('api/auth/', include('accounts.urls')),

    # Admin console / restaurant-owner dashboard
    path('api/admin/', include('restaurants.urls')),
    path('api/admin/', include('menu.urls')),
    path('api/admin/', include('accounts.admin_urls')),
    path('api/admin/', include(admin_urlpatterns)),

    path('api/', include('core.urls')),
]

# Admin site customization
admin.site.site_header = "DishMatch Admin"
admin.site.site_title = "DishMatch Admin"
admin.site.index_title = "Restaurants, dishes and accounts"
