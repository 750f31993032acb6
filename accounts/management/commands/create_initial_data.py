import os

from django.core.management.base import BaseCommand
from django.db import transaction

from accounts.models import CustomUser, Role, SubscriptionTier
from core.children import replace_children
from restaurants.models import Restaurant


class Command(BaseCommand):
    help = 'Create initial development data'

    def add_arguments(self, parser):
        parser.add_argument('--admin-email', default=os.environ.get(
            'INITIAL_ADMIN_EMAIL', 'admin@dishmatch.local'))
        parser.add_argument('--admin-password', default=os.environ.get(
            'INITIAL_ADMIN_PASSWORD', 'admin123'))

    @transaction.atomic
    def handle(self, *args, **options):
        email = options['admin_email']

        # Create admin user if not exists
        admin_user, created = CustomUser.objects.get_or_create(
            email=email,
            defaults={
                'username': email,
                'name': 'Administrator',
                'role': Role.ADMIN,
                'email_verified': True,
                'onboarding_completed': True,
                'is_staff': True,
                'is_superuser': True
            }
        )

        if created:
            admin_user.set_password(options['admin_password'])
            admin_user.save()
            self.stdout.write(self.style.SUCCESS(f'Created admin user {email}'))

        owner, created = CustomUser.objects.get_or_create(
            email='owner@dishmatch.local',
            defaults={
                'username': 'owner@dishmatch.local',
                'name': 'Demo Owner',
                'role': Role.RESTAURANT_OWNER,
                'onboarding_completed': True,
                'subscription_tier': SubscriptionTier.PLUS,
            }
        )

        if created:
            owner.set_password('owner123')
            owner.save()
            self.stdout.write(self.style.SUCCESS(
                'Created demo owner (password: owner123)'))

        # Create a demo restaurant
        restaurant, created = Restaurant.objects.get_or_create(
            name="Demo Restaurant",
            defaults={
                'owner': owner,
                'description': "A demo restaurant for development",
                'address': "123 Main Street",
                'lat': 40.7128,
                'lng': -74.0060,
                'price_range': '$$',
                'email': "demo@dishmatch.local"
            }
        )

        if created:
            replace_children(restaurant, 'cuisine_rows', 'cuisine', ['Italian', 'Pizza'])
            self.stdout.write(self.style.SUCCESS('Created demo restaurant'))

        self.stdout.write(self.style.SUCCESS('Initial data setup complete!'))
