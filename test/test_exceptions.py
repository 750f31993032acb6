import pytest
from django.http import Http404
from rest_framework import serializers

from core.exceptions import (
    BadRequest, Conflict, api_exception_handler, missing_fields, require_fields
)


def test_missing_fields_accepts_zero_and_false():
    data = {'lat': 0, 'lng': 0.0, 'is_active': False, 'name': ' ', 'address': None}

    assert missing_fields(data, ('name', 'address', 'lat', 'lng', 'is_active', 'phone')) == [
        'name', 'address', 'phone']


def test_require_fields_names_every_gap():
    with pytest.raises(BadRequest) as excinfo:
        require_fields({'name': 'x'}, ('name', 'price', 'restaurant_id'))

    assert str(excinfo.value.detail) == 'Missing required fields: price, restaurant_id'
    assert excinfo.value.extra == {'missing': ['price', 'restaurant_id']}


def test_api_error_extra_is_merged_into_envelope():
    response = api_exception_handler(Conflict('Taken', extra={'field': 'email'}), {})

    assert response.status_code == 409
    assert response.data == {'error': 'Taken', 'field': 'email'}


def test_validation_error_is_flattened():
    exc = serializers.ValidationError({'price': ['Price cannot be negative']})

    response = api_exception_handler(exc, {})

    assert response.status_code == 400
    assert response.data['error'] == 'price: Price cannot be negative'
    assert 'price' in response.data['details']


def test_non_field_validation_error_has_plain_message():
    exc = serializers.ValidationError({'non_field_errors': ['Passwords differ']})

    assert api_exception_handler(exc, {}).data['error'] == 'Passwords differ'


def test_http404_becomes_not_found():
    response = api_exception_handler(Http404(), {})

    assert response.status_code == 404
    assert response.data == {'error': 'Not found'}


def test_unexpected_error_is_hidden(caplog):
    response = api_exception_handler(KeyError('secret column'), {})

    assert response.status_code == 500
    assert response.data == {'error': 'Internal server error'}
    assert 'secret column' in caplog.text


def test_require_fields_rejects_non_mapping():
    with pytest.raises(BadRequest) as excinfo:
        require_fields([1, 2], ('name',))

    assert str(excinfo.value.detail) == 'Request body must be an object'
