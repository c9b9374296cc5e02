# petshop/api/pets/test_routes.py
"""
반려동물 API 테스트
"""

import pytest
from bson import ObjectId

from petshop.core.database import BREEDS, COLORS, PETS
from petshop.models.pet import Pet, PetGender, PetSize
from petshop.models.reference import Breed, Color


@pytest.fixture
def refs(store):
    breeds = store.collection(BREEDS)
    colors = store.collection(COLORS)
    creator = ObjectId()
    return {
        'poodle': breeds.insert_one(Breed(name='Poodle', created_by=creator).to_document()).inserted_id,
        'beagle': breeds.insert_one(Breed(name='Beagle', created_by=creator).to_document()).inserted_id,
        'retired': breeds.insert_one(Breed(name='Retired', created_by=creator, is_active=False).to_document()).inserted_id,
        'white': colors.insert_one(Color(name='White', hex_code='#FFFFFF').to_document()).inserted_id,
        'brown': colors.insert_one(Color(name='Brown', hex_code='#8B4513').to_document()).inserted_id,
    }


def _insert_pet(store, refs, **overrides):
    fields = dict(
        name='Coco',
        breed=refs['poodle'],
        gender=PetGender.FEMALE,
        age='3 months',
        size=PetSize.SMALL,
        color=refs['white'],
        price=500.0,
        images=['https://example.com/coco.jpg'],
        location='Seoul'
    )
    fields.update(overrides)
    return store.collection(PETS).insert_one(Pet(**fields).to_document()).inserted_id


@pytest.fixture
def pets(store, refs):
    _insert_pet(store, refs, name='Coco', price=500.0)
    _insert_pet(store, refs, name='Max', breed=refs['beagle'], gender=PetGender.MALE,
                size=PetSize.MEDIUM, color=refs['brown'], price=300.0, location='Busan')
    _insert_pet(store, refs, name='Bella', breed=refs['beagle'], price=800.0, is_available=False)
    _insert_pet(store, refs, name='Toby', gender=PetGender.MALE, size=PetSize.LARGE, price=150.0)


def test_list_pets_defaults(client, pets):
    body = client.get('/api/pets/').get_json()
    assert body['message'] == 'Pets retrieved successfully'
    assert len(body['data']) == 4
    assert body['pagination']['totalItems'] == 4
    assert body['appliedFilters'] == {'applied': False, 'criteria': {}}
    first = body['data'][0]
    assert set(first['breed']) == {'id', 'name', 'description'}
    assert set(first['color']) == {'id', 'name', 'hexCode', 'description'}


def test_list_pets_filters(client, refs, pets):
    body = client.get(f"/api/pets/?breed={refs['beagle']}&isAvailable=true").get_json()
    assert [p['name'] for p in body['data']] == ['Max']
    assert body['appliedFilters']['criteria'] == {'breed': str(refs['beagle']), 'is_available': True}

    body = client.get('/api/pets/?gender=Male&sortBy=price&sortOrder=asc').get_json()
    assert [p['name'] for p in body['data']] == ['Toby', 'Max']

    body = client.get('/api/pets/?location=Busan').get_json()
    assert [p['name'] for p in body['data']] == ['Max']

    body = client.get('/api/pets/?minPrice=200&maxPrice=600&sortBy=name&sortOrder=asc').get_json()
    assert [p['name'] for p in body['data']] == ['Coco', 'Max']


def test_list_pets_pagination(client, pets):
    body = client.get('/api/pets/?limit=3&page=2&sortBy=price&sortOrder=desc').get_json()
    assert [p['name'] for p in body['data']] == ['Toby']
    assert body['pagination'] == {
        'currentPage': 2,
        'totalPages': 2,
        'totalItems': 4,
        'hasNextPage': False,
        'hasPrevPage': True
    }


@pytest.mark.parametrize('query', ['gender=unknown', 'size=Huge', 'breed=poodle', 'maxPrice=cheap', 'sortBy=rating'])
def test_list_pets_invalid_params(client, pets, query):
    response = client.get(f'/api/pets/?{query}')
    assert response.status_code == 400
    assert response.get_json()['error_code'] == 'VALIDATION_ERROR'


def test_filter_options(client, pets):
    data = client.get('/api/pets/filter-options').get_json()['data']
    assert [b['name'] for b in data['breeds']] == ['Beagle', 'Poodle']
    assert [c['name'] for c in data['colors']] == ['Brown', 'White']
    assert data['genders'] == ['Male', 'Female']
    assert data['sizes'] == ['Small', 'Medium', 'Large']
    assert data['priceRange'] == {'min': 150.0, 'max': 800.0}


def test_get_pet(client, store, refs):
    pet_id = _insert_pet(store, refs)
    body = client.get(f'/api/pets/{pet_id}').get_json()
    assert body['data']['pet']['name'] == 'Coco'
    assert body['data']['pet']['breed']['name'] == 'Poodle'

    response = client.get(f'/api/pets/{ObjectId()}')
    assert response.status_code == 404
    assert response.get_json()['error_code'] == 'PET_NOT_FOUND'


def _pet_payload(refs, **overrides):
    payload = {
        'name': 'Luna',
        'breed': str(refs['poodle']),
        'gender': 'Female',
        'age': '2 months',
        'size': 'Small',
        'color': str(refs['white']),
        'price': 650,
        'images': ['https://example.com/luna.jpg'],
        'location': 'Incheon'
    }
    payload.update(overrides)
    return payload


def test_create_pet_defaults(client, store, refs, staff_headers):
    response = client.post('/api/pets/', json=_pet_payload(refs), headers=staff_headers)
    assert response.status_code == 201
    pet = response.get_json()['data']['pet']
    assert pet['isAvailable'] is True
    assert pet['isVaccinated'] is False
    assert pet['hasMicrochip'] is False
    assert pet['publishedDate'] is not None
    assert pet['color']['hexCode'] == '#FFFFFF'

    stored = store.collection(PETS).find_one({'_id': ObjectId(pet['id'])})
    assert stored['gender'] == 'Female'
    assert stored['breed'] == refs['poodle']


def test_create_pet_with_inactive_breed(client, store, refs, staff_headers):
    response = client.post('/api/pets/', json=_pet_payload(refs, breed=str(refs['retired'])), headers=staff_headers)
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Invalid breed selected'
    assert store.collection(PETS).count_documents({}) == 0


def test_create_pet_with_unknown_color(client, refs, staff_headers):
    response = client.post('/api/pets/', json=_pet_payload(refs, color=str(ObjectId())), headers=staff_headers)
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Invalid color selected'


def test_create_pet_validation(client, refs, staff_headers):
    payload = _pet_payload(refs, images=[], price=-1, gender='Unknown')
    response = client.post('/api/pets/', json=payload, headers=staff_headers)
    assert response.status_code == 400
    assert set(response.get_json()['details']) >= {'images', 'price', 'gender'}


def test_create_pet_requires_staff(client, refs, customer_headers):
    assert client.post('/api/pets/', json=_pet_payload(refs)).status_code == 401
    assert client.post('/api/pets/', json=_pet_payload(refs), headers=customer_headers).status_code == 403


def test_update_pet(client, store, refs, staff_headers):
    pet_id = _insert_pet(store, refs)
    response = client.patch(
        f'/api/pets/{pet_id}',
        json={'price': 420, 'color': str(refs['brown']), 'isVaccinated': True},
        headers=staff_headers
    )
    assert response.status_code == 200
    pet = response.get_json()['data']['pet']
    assert pet['price'] == 420
    assert pet['color']['name'] == 'Brown'
    assert pet['isVaccinated'] is True
    assert pet['isAvailable'] is True


def test_update_availability(client, store, refs, staff_headers):
    pet_id = _insert_pet(store, refs)
    response = client.patch(f'/api/pets/{pet_id}/availability', json={'isAvailable': False}, headers=staff_headers)
    assert response.status_code == 200
    assert response.get_json()['data']['pet']['isAvailable'] is False
    assert store.collection(PETS).find_one({'_id': pet_id})['is_available'] is False

    response = client.patch(f'/api/pets/{pet_id}/availability', json={}, headers=staff_headers)
    assert response.status_code == 400


def test_delete_pet(client, store, refs, admin_headers):
    pet_id = _insert_pet(store, refs)
    assert client.delete(f'/api/pets/{pet_id}', headers=admin_headers).status_code == 200
    assert store.collection(PETS).count_documents({}) == 0
    assert client.delete(f'/api/pets/{pet_id}', headers=admin_headers).status_code == 404


def test_filter_options_empty_collection(client):
    data = client.get('/api/pets/filter-options').get_json()['data']
    assert data['priceRange'] == {'min': 0, 'max': 0}
    assert data['breeds'] == []
    assert data['colors'] == []
