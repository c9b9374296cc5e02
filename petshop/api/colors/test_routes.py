# petshop/api/colors/test_routes.py
"""
참조 데이터(색상/카테고리/품종) API 테스트
"""

from bson import ObjectId

from petshop.core.database import BREEDS, COLORS, PETS


def _create_color(client, headers, name, hex_code):
    return client.post('/api/colors/', json={'name': name, 'hexCode': hex_code}, headers=headers)


def test_color_crud(client, staff_headers):
    response = _create_color(client, staff_headers, 'White', '#FFF')
    assert response.status_code == 201
    color = response.get_json()['data']
    assert color['hexCode'] == '#FFF'
    assert color['isActive'] is True

    _create_color(client, staff_headers, 'Apricot', '#FBCEB1')
    names = [c['name'] for c in client.get('/api/colors/').get_json()['data']]
    assert names == ['Apricot', 'White']

    response = client.patch(f"/api/colors/{color['id']}", json={'isActive': False}, headers=staff_headers)
    assert response.get_json()['data']['isActive'] is False
    assert [c['name'] for c in client.get('/api/colors/?isActive=true').get_json()['data']] == ['Apricot']

    assert client.delete(f"/api/colors/{color['id']}", headers=staff_headers).status_code == 200
    assert client.get(f"/api/colors/{color['id']}").status_code == 404


def test_color_uniqueness(client, staff_headers):
    _create_color(client, staff_headers, 'White', '#FFFFFF')
    assert _create_color(client, staff_headers, 'White', '#FEFEFE').status_code == 409
    assert _create_color(client, staff_headers, 'Snow', '#FFFFFF').status_code == 409


def test_color_hex_validation(client, staff_headers):
    response = _create_color(client, staff_headers, 'Odd', 'FFFFFF')
    assert response.status_code == 400
    assert 'hexCode' in response.get_json()['details']


def test_color_bulk_delete(client, store, staff_headers):
    ids = [_create_color(client, staff_headers, name, hex_code).get_json()['data']['id']
           for name, hex_code in [('Black', '#000'), ('Gray', '#808080'), ('Cream', '#FFFDD0')]]
    response = client.post('/api/colors/bulk-delete', json={'ids': ids[:2] + [str(ObjectId())]}, headers=staff_headers)
    assert response.status_code == 200
    assert response.get_json()['data']['deletedCount'] == 2
    assert store.collection(COLORS).count_documents({}) == 1


def test_color_usage_stats(client, store, staff_headers):
    color_id = _create_color(client, staff_headers, 'Brown', '#8B4513').get_json()['data']['id']
    store.collection(PETS).insert_many([
        {'name': 'A', 'color': ObjectId(color_id), 'is_available': True},
        {'name': 'B', 'color': ObjectId(color_id), 'is_available': False},
        {'name': 'C', 'color': ObjectId(), 'is_available': True},
    ])
    response = client.get(f'/api/colors/{color_id}/usage-stats', headers=staff_headers)
    assert response.status_code == 200
    stats = response.get_json()['data']
    assert stats['totalPets'] == 2
    assert stats['availablePets'] == 1
    assert stats['color']['name'] == 'Brown'


def test_reference_mutations_require_staff(client, customer_headers):
    assert client.post('/api/colors/', json={'name': 'X', 'hexCode': '#000'}).status_code == 401
    assert client.post('/api/categories/', json={'name': 'X'}, headers=customer_headers).status_code == 403


def test_category_crud_and_conflict(client, staff_headers):
    response = client.post('/api/categories/', json={'name': 'Dog Food', 'description': 'Kibble'}, headers=staff_headers)
    assert response.status_code == 201
    category_id = response.get_json()['data']['id']

    response = client.post('/api/categories/', json={'name': 'Dog Food'}, headers=staff_headers)
    assert response.status_code == 409
    assert response.get_json()['message'] == 'Category name already exists'

    response = client.patch(f'/api/categories/{category_id}', json={'isActive': False}, headers=staff_headers)
    assert response.get_json()['data']['isActive'] is False
    assert response.get_json()['data']['name'] == 'Dog Food'

    response = client.get('/api/categories/not-an-id')
    assert response.status_code == 400


def test_breed_records_creator(client, store, make_headers):
    staff_id = ObjectId()
    response = client.post('/api/breeds/', json={'name': 'Shiba Inu'}, headers=make_headers('staff', staff_id))
    assert response.status_code == 201
    assert response.get_json()['data']['createdBy'] == str(staff_id)
    assert store.collection(BREEDS).find_one({'name': 'Shiba Inu'})['created_by'] == staff_id
