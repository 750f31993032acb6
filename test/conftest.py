"""Shared fixtures: users of every role, authenticated API clients, factories."""

import pytest
from rest_framework.test import APIClient

from accounts.models import CustomUser, Role
from accounts.utils import create_jwt_token
from menu.models import Dish
from restaurants.models import Restaurant

PASSWORD = 'Sup3r-secret-pass'


def make_user(email, role=Role.USER, **extra):
    return CustomUser.objects.create_user(
        username=email, email=email, password=PASSWORD,
        name=email.split('@')[0].title(), role=role, **extra)


def client_for(user):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {create_jwt_token(user)}')
    return client


@pytest.fixture
def admin_user(db):
    return make_user('admin@example.com', Role.ADMIN)


@pytest.fixture
def owner(db):
    return make_user('owner@example.com', Role.RESTAURANT_OWNER)


@pytest.fixture
def other_owner(db):
    return make_user('rival@example.com', Role.RESTAURANT_OWNER)


@pytest.fixture
def plain_user(db):
    return make_user('diner@example.com', Role.USER)


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_client(admin_user):
    return client_for(admin_user)


@pytest.fixture
def owner_client(owner):
    return client_for(owner)


@pytest.fixture
def other_owner_client(other_owner):
    return client_for(other_owner)


@pytest.fixture
def user_client(plain_user):
    return client_for(plain_user)


@pytest.fixture
def make_restaurant(db):
    def factory(owner=None, name='Trattoria', **fields):
        fields.setdefault('address', '1 Market St')
        fields.setdefault('lat', 40.0)
        fields.setdefault('lng', -74.0)
        return Restaurant.objects.create(owner=owner, name=name, **fields)
    return factory


@pytest.fixture
def make_dish(db):
    def factory(restaurant, name='House Special', price='9.50', **fields):
        return Dish.objects.create(restaurant=restaurant, name=name, price=price, **fields)
    return factory
