from django.urls import path
from . import views

admin_urlpatterns = [
    path('dashboard/stats/', views.dashboard_stats, name='dashboard-stats'),
    path('stats/', views.platform_stats, name='platform-stats'),
    path('upload/', views.upload_image, name='upload-image'),
]

urlpatterns = [
    path('health/', views.health_check, name='health-check'),
    path('analytics/events/', views.track_event, name='analytics-events'),
    path('analytics/summary/', views.analytics_summary, name='analytics-summary'),
]
