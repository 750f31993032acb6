import pytest

from core.pagination import _positive_int

URL = '/api/admin/restaurants/'


@pytest.mark.parametrize('value, expected', [
    ('3', 3),
    (None, 10),
    ('abc', 10),
    ('0', 10),
    ('-4', 10),
    ('2.5', 10),
])
def test_positive_int_falls_back_to_default(value, expected):
    assert _positive_int(value, 10) == expected


def test_positive_int_is_capped():
    assert _positive_int('500', 10, cap=100) == 100


@pytest.fixture
def twelve_restaurants(make_restaurant):
    for index in range(12):
        make_restaurant(name=f'Place {index:02d}')


def test_default_page(admin_client, twelve_restaurants):
    response = admin_client.get(URL)

    assert response.status_code == 200
    assert len(response.data['items']) == 10
    assert response.data['pagination'] == {'page': 1, 'limit': 10, 'total': 12, 'pages': 2}


def test_pages_is_ceiling_of_total_over_limit(admin_client, twelve_restaurants):
    response = admin_client.get(URL, {'limit': 5, 'page': 3})

    assert response.data['pagination'] == {'page': 3, 'limit': 5, 'total': 12, 'pages': 3}
    assert len(response.data['items']) == 2


def test_page_past_the_end_is_empty(admin_client, twelve_restaurants):
    response = admin_client.get(URL, {'limit': 5, 'page': 9})

    assert response.status_code == 200
    assert response.data['items'] == []
    assert response.data['pagination']['total'] == 12


def test_bad_values_fall_back_to_defaults(admin_client, twelve_restaurants):
    response = admin_client.get(URL, {'limit': 'lots', 'page': '-2'})

    assert response.data['pagination']['page'] == 1
    assert response.data['pagination']['limit'] == 10


def test_limit_is_capped(admin_client, twelve_restaurants):
    response = admin_client.get(URL, {'limit': 1000})

    assert response.data['pagination']['limit'] == 100
    assert len(response.data['items']) == 12


def test_items_are_newest_first(admin_client, twelve_restaurants):
    names = [item['name'] for item in admin_client.get(URL, {'limit': 3}).data['items']]

    assert names == ['Place 11', 'Place 10', 'Place 09']


def test_empty_table_has_zero_pages(admin_client):
    response = admin_client.get(URL)

    assert response.data == {
        'items': [],
        'pagination': {'page': 1, 'limit': 10, 'total': 0, 'pages': 0},
    }
