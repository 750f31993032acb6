from django.urls import path
from . import views

urlpatterns = [
    # Authentication
    path('register/', views.register_view, name='register'),
    path('login/', views.login_view, name='login'),

    # One-time codes
    path('otp/resend/', views.otp_resend_view, name='otp_resend'),
    path('otp/verify/', views.otp_verify_view, name='otp_verify'),

    # Profile Management
    path('profile/', views.profile_view, name='profile'),
    path('change-password/', views.change_password_view, name='change_password'),
]
