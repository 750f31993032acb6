# core/business_logic.py
from collections import Counter
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.db.models import Count
from django.utils import timezone

from accounts.models import Role
from .scope import DISH, RESTAURANT, build_scope

RECENT_ACTIVITY_LIMIT = 3
ACTIVE_USER_WINDOW_DAYS = 7
DAILY_ACTIVITY_DAYS = 7


class StatsBusinessLogic:
    @staticmethod
    def dashboard_stats(principal):
        """Counts for the admin/owner dashboard, limited to the principal's scope"""
        from restaurants.models import Restaurant
        from menu.models import Dish

        restaurants = Restaurant.objects.filter(build_scope(principal, RESTAURANT))
        dishes = Dish.objects.filter(build_scope(principal, DISH))

        stats = {
            'total_restaurants': restaurants.count(),
            'active_restaurants': restaurants.filter(is_active=True).count(),
            'total_dishes': dishes.count(),
            'available_dishes': dishes.filter(is_active=True, is_available=True).count(),
        }
        if principal.is_admin:
            stats['total_users'] = get_user_model().objects.count()

        recent = restaurants.order_by('-created_at', '-id')[:RECENT_ACTIVITY_LIMIT]
        stats['recent_activity'] = [
            {
                'id': restaurant.id,
                'type': 'restaurant',
                'action': 'created',
                'description': f'New restaurant "{restaurant.name}" was added',
                'timestamp': restaurant.created_at,
            }
            for restaurant in recent
        ]
        return stats

    @staticmethod
    def platform_stats():
        """Platform-wide counts for admins"""
        from restaurants.models import Restaurant
        from menu.models import Dish

        User = get_user_model()
        now = timezone.now()
        start_of_today = now.replace(hour=0, minute=0, second=0, microsecond=0)

        by_role = dict(
            User.objects.values_list('role').annotate(total=Count('id')).order_by())

        return {
            'total_users': User.objects.count(),
            'total_restaurants': Restaurant.objects.count(),
            'total_dishes': Dish.objects.count(),
            'active_users': User.objects.filter(
                updated_at__gte=now - timedelta(days=ACTIVE_USER_WINDOW_DAYS)).count(),
            'new_users_today': User.objects.filter(created_at__gte=start_of_today).count(),
            'users_by_role': {role.value: by_role.get(role.value, 0) for role in Role},
        }


class AnalyticsBusinessLogic:
    @staticmethod
    def summary(user, days=30, event_type=None):
        """Activity summary of one user's events over the last ``days`` days"""
        from .models import AnalyticsEvent

        now = timezone.now()
        events = AnalyticsEvent.objects.filter(
            user=user, created_at__gte=now - timedelta(days=days))
        if event_type:
            events = events.filter(event_type=event_type)

        breakdown = Counter(events.values_list('event_type', flat=True))

        today = timezone.localdate()
        daily = Counter(
            timezone.localtime(created).date()
            for created in events.filter(
                created_at__gte=now - timedelta(days=DAILY_ACTIVITY_DAYS)
            ).values_list('created_at', flat=True)
        )
        daily_activity = []
        for offset in range(DAILY_ACTIVITY_DAYS - 1, -1, -1):
            day = today - timedelta(days=offset)
            daily_activity.append({'date': day.isoformat(), 'events': daily.get(day, 0)})

        return {
            'timeframe': f'{days} days',
            'total_events': events.count(),
            'event_types': dict(breakdown),
            'daily_activity': daily_activity,
            'recent_events': list(events.order_by('-created_at', '-id')[:10]),
        }
