# petshop/api/users/test_routes.py
"""
사용자 본인 정보 / [관리자] 고객 계정 관리 API 테스트
"""

import pytest
from bson import ObjectId
from werkzeug.security import check_password_hash, generate_password_hash

from petshop.core.database import USERS
from petshop.models.user import User, UserRole


def _insert_user(store, name, email, role=UserRole.CUSTOMER, password='current-pass'):
    user = User(name=name, email=email, password=generate_password_hash(password), role=role)
    return store.collection(USERS).insert_one(user.to_document()).inserted_id


@pytest.fixture
def me(store):
    return _insert_user(store, 'Hong Gildong', 'hong@example.com')


@pytest.fixture
def me_headers(make_headers, me):
    return make_headers('customer', me)


def test_get_me(client, me, me_headers):
    response = client.get('/api/users/me', headers=me_headers)
    assert response.status_code == 200
    user = response.get_json()['data']['user']
    assert user['id'] == str(me)
    assert user['email'] == 'hong@example.com'
    assert 'password' not in user


def test_get_me_requires_token(client):
    response = client.get('/api/users/me')
    assert response.status_code == 401
    assert response.get_json()['error_code'] == 'UNAUTHORIZED'

    response = client.get('/api/users/me', headers={'Authorization': 'Bearer not-a-jwt'})
    assert response.status_code == 401
    assert response.get_json()['error_code'] == 'INVALID_TOKEN'


def test_update_me(client, store, me, me_headers):
    _insert_user(store, 'Other', 'taken@example.com')

    response = client.patch('/api/users/me', json={'name': 'Hong G.'}, headers=me_headers)
    assert response.status_code == 200
    assert response.get_json()['data']['user']['name'] == 'Hong G.'

    response = client.patch('/api/users/me', json={'email': 'taken@example.com'}, headers=me_headers)
    assert response.status_code == 409
    assert store.collection(USERS).find_one({'_id': me})['email'] == 'hong@example.com'

    response = client.patch('/api/users/me', json={'email': 'broken'}, headers=me_headers)
    assert response.status_code == 400


def test_change_password(client, store, me, me_headers):
    response = client.patch(
        '/api/users/me/password',
        json={'currentPassword': 'current-pass', 'newPassword': 'brand-new'},
        headers=me_headers
    )
    assert response.status_code == 200
    assert check_password_hash(store.collection(USERS).find_one({'_id': me})['password'], 'brand-new')


@pytest.mark.parametrize('payload, error_code', [
    ({'currentPassword': 'wrong-pass', 'newPassword': 'brand-new'}, 'INVALID_PASSWORD'),
    ({'currentPassword': 'current-pass', 'newPassword': 'current-pass'}, 'SAME_PASSWORD'),
])
def test_change_password_rejected(client, store, me, me_headers, payload, error_code):
    response = client.patch('/api/users/me/password', json=payload, headers=me_headers)
    assert response.status_code == 400
    assert response.get_json()['error_code'] == error_code
    assert check_password_hash(store.collection(USERS).find_one({'_id': me})['password'], 'current-pass')


def test_me_with_unknown_user(client, make_headers):
    response = client.get('/api/users/me', headers=make_headers('customer', ObjectId()))
    assert response.status_code == 404
    assert response.get_json()['error_code'] == 'USER_NOT_FOUND'


def test_list_customers(client, store, me, admin_headers, customer_headers):
    _insert_user(store, 'Staff Member', 'staff@petshop.com', role=UserRole.STAFF)
    _insert_user(store, 'Admin', 'admin@petshop.com', role=UserRole.ADMIN)
    _insert_user(store, 'Newer Customer', 'newer@example.com')

    assert client.get('/api/users/', headers=customer_headers).status_code == 403

    body = client.get('/api/users/', headers=admin_headers).get_json()
    assert [u['name'] for u in body['data']] == ['Newer Customer', 'Hong Gildong']


def test_update_status(client, store, me, admin_headers):
    response = client.patch(
        f'/api/users/{me}/status',
        json={'isActive': False, 'reason': 'Repeated payment disputes'},
        headers=admin_headers
    )
    assert response.status_code == 200
    assert response.get_json()['data']['user']['isActive'] is False
    assert store.collection(USERS).find_one({'_id': me})['is_active'] is False

    response = client.patch(f'/api/users/{ObjectId()}/status', json={'isActive': True}, headers=admin_headers)
    assert response.status_code == 404


def test_update_me_rejects_name_of_other_user(client, store, me, me_headers):
    """다른 사용자(직원 포함)가 쓰는 이름으로는 바꿀 수 없음"""
    _insert_user(store, 'Staff Kim', 'kim@petshop.com', role=UserRole.STAFF)

    response = client.patch('/api/users/me', json={'name': 'Staff Kim'}, headers=me_headers)
    assert response.status_code == 409
    assert store.collection(USERS).find_one({'_id': me})['name'] == 'Hong Gildong'

    # 자기 이름을 그대로 보내는 것은 허용
    response = client.patch('/api/users/me', json={'name': 'Hong Gildong'}, headers=me_headers)
    assert response.status_code == 200
