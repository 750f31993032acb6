"""Restaurant endpoint: ownership scoping, required fields, cuisines."""

from core.models import AuditLog
from menu.models import Dish
from restaurants.models import Restaurant

URL = '/api/admin/restaurants/'


def detail(pk):
    return f'{URL}{pk}/'


CAFE = {'name': 'Test Café', 'address': '12 Rue Cler', 'lat': 48.85, 'lng': 2.35}


def test_owner_creates_restaurant_for_themselves(owner_client, owner):
    response = owner_client.post(URL, CAFE)

    assert response.status_code == 201
    assert response.data['name'] == 'Test Café'
    assert response.data['owner_id'] == owner.id
    assert response.data['cuisines'] == []
    assert Restaurant.objects.get(pk=response.data['id']).owner == owner


def test_foreign_owner_gets_not_found_while_admin_sees_it(
        owner_client, other_owner_client, admin_client):
    pk = owner_client.post(URL, CAFE).data['id']

    response = other_owner_client.get(detail(pk))
    assert response.status_code == 404
    assert response.data == {'error': 'Restaurant not found'}

    assert admin_client.get(detail(pk)).status_code == 200


def test_missing_fields_are_all_listed(owner_client):
    response = owner_client.post(URL, {'name': 'Half Done'})

    assert response.status_code == 400
    assert response.data['error'] == 'Missing required fields: address, lat, lng'
    assert Restaurant.objects.count() == 0


def test_blank_and_null_count_as_missing(owner_client):
    response = owner_client.post(URL, {**CAFE, 'name': '  ', 'lat': None})

    assert response.status_code == 400
    assert response.data['missing'] == ['name', 'lat']


def test_zero_coordinates_are_valid(owner_client):
    response = owner_client.post(URL, {**CAFE, 'lat': 0, 'lng': 0})

    assert response.status_code == 201
    assert response.data['lat'] == 0
    assert response.data['lng'] == 0


def test_out_of_range_latitude_is_rejected(owner_client):
    response = owner_client.post(URL, {**CAFE, 'lat': 123})

    assert response.status_code == 400
    assert response.data['error'].startswith('lat:')
    assert 'lat' in response.data['details']


def test_cuisines_keep_order_and_duplicates(owner_client):
    response = owner_client.post(URL, {**CAFE, 'cuisines': ['Thai', 'Vegan', 'Thai']})

    assert response.status_code == 201
    assert response.data['cuisines'] == ['Thai', 'Vegan', 'Thai']


def test_update_replaces_cuisines(owner_client):
    pk = owner_client.post(URL, {**CAFE, 'cuisines': ['French', 'Bakery']}).data['id']

    response = owner_client.put(detail(pk), {'cuisines': ['Coffee']})

    assert response.status_code == 200
    assert response.data['cuisines'] == ['Coffee']


def test_partial_update_leaves_other_fields(owner_client):
    pk = owner_client.post(URL, {**CAFE, 'cuisines': ['French']}).data['id']

    response = owner_client.patch(detail(pk), {'description': 'Cosy corner'})

    assert response.data['description'] == 'Cosy corner'
    assert response.data['name'] == 'Test Café'
    assert response.data['cuisines'] == ['French']


def test_owner_list_only_shows_own_rows(owner_client, owner, other_owner, make_restaurant):
    make_restaurant(owner=owner, name='Mine')
    make_restaurant(owner=other_owner, name='Theirs')
    make_restaurant(owner=None, name='Platform')

    response = owner_client.get(URL)

    assert [item['name'] for item in response.data['items']] == ['Mine']
    assert response.data['pagination']['total'] == 1


def test_admin_list_shows_everything(admin_client, owner, other_owner, make_restaurant):
    make_restaurant(owner=owner, name='Mine')
    make_restaurant(owner=other_owner, name='Theirs')
    make_restaurant(owner=None, name='Platform')

    assert admin_client.get(URL).data['pagination']['total'] == 3


def test_search_is_case_insensitive(admin_client, make_restaurant):
    make_restaurant(name='Sushi Bar')
    make_restaurant(name='Burger Shack', description='Smash burgers')
    make_restaurant(name='Noodle House', address='5 SUSHI Lane')

    response = admin_client.get(URL, {'search': 'sushi'})

    assert sorted(item['name'] for item in response.data['items']) == ['Noodle House', 'Sushi Bar']


def test_is_active_filter(admin_client, make_restaurant):
    make_restaurant(name='Open')
    make_restaurant(name='Closed', is_active=False)

    response = admin_client.get(URL, {'is_active': 'false'})

    assert [item['name'] for item in response.data['items']] == ['Closed']


def test_owner_cannot_update_or_delete_foreign_row(owner_client, other_owner, make_restaurant):
    theirs = make_restaurant(owner=other_owner, name='Theirs')

    assert owner_client.put(detail(theirs.pk), {'name': 'Hijacked'}).status_code == 404
    assert owner_client.patch(detail(theirs.pk), {'name': 'Hijacked'}).status_code == 404
    assert owner_client.delete(detail(theirs.pk)).status_code == 404

    theirs.refresh_from_db()
    assert theirs.name == 'Theirs'


def test_unknown_id_is_not_found(admin_client):
    response = admin_client.get(detail(999999))

    assert response.status_code == 404
    assert response.data == {'error': 'Restaurant not found'}


def test_owner_cannot_reassign_ownership(owner_client, owner, other_owner):
    pk = owner_client.post(URL, {**CAFE, 'owner_id': other_owner.id}).data['id']
    assert Restaurant.objects.get(pk=pk).owner == owner

    owner_client.patch(detail(pk), {'owner_id': other_owner.id})
    assert Restaurant.objects.get(pk=pk).owner == owner


def test_admin_assigns_owner(admin_client, owner):
    response = admin_client.post(URL, {**CAFE, 'owner_id': owner.id})

    assert response.status_code == 201
    assert response.data['owner_id'] == owner.id
    assert response.data['owner']['email'] == owner.email


def test_admin_created_restaurant_defaults_to_platform_managed(admin_client):
    response = admin_client.post(URL, CAFE)

    assert response.status_code == 201
    assert response.data['owner_id'] is None


def test_admin_cannot_assign_unknown_owner(admin_client):
    response = admin_client.post(URL, {**CAFE, 'owner_id': 424242})

    assert response.status_code == 400
    assert 'owner_id' in response.data['details']


def test_detail_inlines_dishes(owner_client, owner, make_restaurant, make_dish):
    restaurant = make_restaurant(owner=owner)
    make_dish(restaurant, name='Ravioli')

    response = owner_client.get(detail(restaurant.pk))

    assert response.data['dish_count'] == 1
    assert [dish['name'] for dish in response.data['dishes']] == ['Ravioli']


def test_delete_cascades_to_dishes(owner_client, owner, make_restaurant, make_dish):
    restaurant = make_restaurant(owner=owner)
    make_dish(restaurant)

    response = owner_client.delete(detail(restaurant.pk))

    assert response.status_code == 200
    assert response.data == {'message': 'Restaurant deleted successfully'}
    assert not Restaurant.objects.filter(pk=restaurant.pk).exists()
    assert Dish.objects.count() == 0


def test_writes_are_audited(owner_client, owner):
    pk = owner_client.post(URL, CAFE).data['id']
    owner_client.patch(detail(pk), {'phone': '555-0100'})
    owner_client.delete(detail(pk))

    actions = list(AuditLog.objects.filter(model_name='Restaurant', object_id=str(pk))
                   .order_by('id').values_list('action', 'user'))
    assert actions == [
        (AuditLog.ACTION_CREATE, owner.id),
        (AuditLog.ACTION_UPDATE, owner.id),
        (AuditLog.ACTION_DELETE, owner.id),
    ]


def test_plain_user_is_forbidden(user_client):
    response = user_client.get(URL)

    assert response.status_code == 403
    assert 'error' in response.data


def test_missing_token_is_unauthenticated(api_client):
    response = api_client.get(URL)

    assert response.status_code == 401
    assert response['WWW-Authenticate'] == 'Bearer'


def test_garbage_token_is_unauthenticated(api_client):
    api_client.credentials(HTTP_AUTHORIZATION='Bearer not-a-jwt')

    response = api_client.get(URL)

    assert response.status_code == 401
    assert response.data == {'error': 'Invalid token'}


def test_non_object_body_is_bad_request(owner_client):
    response = owner_client.post(URL, [1, 2], format='json')

    assert response.status_code == 400
    assert response.data == {'error': 'Request body must be an object'}
    assert Restaurant.objects.count() == 0


def test_admin_cannot_assign_plain_user_as_owner(admin_client, plain_user):
    response = admin_client.post(URL, {**CAFE, 'owner_id': plain_user.id})

    assert response.status_code == 400
    assert 'owner_id' in response.data['details']
    assert Restaurant.objects.count() == 0
