from accounts.models import CustomUser, Role
from core.models import AuditLog

URL = '/api/admin/users/'


def detail(pk):
    return f'{URL}{pk}/'


def test_admin_lists_users(admin_client, owner, plain_user):
    response = admin_client.get(URL)

    assert response.status_code == 200
    assert response.data['pagination']['total'] == 3
    assert {item['email'] for item in response.data['items']} == {
        'admin@example.com', 'owner@example.com', 'diner@example.com'}


def test_role_filter_and_search(admin_client, owner, other_owner, plain_user):
    by_role = admin_client.get(URL, {'role': Role.RESTAURANT_OWNER})
    assert by_role.data['pagination']['total'] == 2

    by_search = admin_client.get(URL, {'search': 'rival'})
    assert [item['email'] for item in by_search.data['items']] == ['rival@example.com']


def test_owner_cannot_manage_users(owner_client):
    assert owner_client.get(URL).status_code == 403


def test_admin_changes_role(admin_client, plain_user):
    response = admin_client.patch(detail(plain_user.pk), {'role': Role.RESTAURANT_OWNER})

    assert response.status_code == 200
    assert response.data['role'] == Role.RESTAURANT_OWNER
    plain_user.refresh_from_db()
    assert plain_user.role == Role.RESTAURANT_OWNER
    assert AuditLog.objects.filter(
        action=AuditLog.ACTION_UPDATE, model_name='CustomUser',
        object_id=str(plain_user.pk)).exists()


def test_role_outside_enumeration_is_rejected(admin_client, plain_user):
    response = admin_client.patch(detail(plain_user.pk), {'role': 'waiter'})

    assert response.status_code == 400
    plain_user.refresh_from_db()
    assert plain_user.role == Role.USER


def test_admin_cannot_demote_themselves(admin_client, admin_user):
    response = admin_client.patch(detail(admin_user.pk), {'role': Role.USER})

    assert response.status_code == 400
    assert response.data == {'error': 'Cannot remove admin role from yourself'}


def test_toggle_active(admin_client, plain_user):
    url = f'{detail(plain_user.pk)}toggle-active/'

    first = admin_client.post(url)
    assert first.data['message'] == 'User deactivated successfully'
    assert CustomUser.objects.get(pk=plain_user.pk).is_active is False

    second = admin_client.post(url)
    assert second.data['user']['is_active'] is True


def test_cannot_deactivate_yourself(admin_client, admin_user):
    response = admin_client.post(f'{detail(admin_user.pk)}toggle-active/')

    assert response.status_code == 400
    assert CustomUser.objects.get(pk=admin_user.pk).is_active is True


def test_unknown_user(admin_client):
    response = admin_client.get(detail(987654))

    assert response.status_code == 404
    assert response.data == {'error': 'User not found'}


def test_search_is_one_substring(admin_client, owner):
    assert admin_client.get(URL, {'search': 'owner example'}).data['items'] == []
    assert admin_client.get(URL, {'search': 'owner@exam'}).data['pagination']['total'] == 1
