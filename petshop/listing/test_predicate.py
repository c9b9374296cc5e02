# petshop/listing/test_predicate.py
"""
조회 조건(predicate) 조립 테스트
"""

import re

import pytest
from bson import ObjectId

from petshop.listing.criteria import normalize_pet_filters, normalize_product_filters, normalize_staff_filters
from petshop.listing.predicate import (
    ExactMatch, QueryBuilder, Range, TextSearch,
    build_pet_query, build_product_query, build_staff_query
)


def test_empty_criteria_builds_empty_predicate():
    built = build_product_query(normalize_product_filters({}))
    assert built.predicate == {}
    assert built.applied is False
    assert built.applied_filters() == {'applied': False, 'criteria': {}}


def test_range_omits_absent_bounds():
    assert Range('price', minimum=10).to_predicate() == {'price': {'$gte': 10}}
    assert Range('price', maximum=50).to_predicate() == {'price': {'$lte': 50}}
    assert Range('price', 10, 50).to_predicate() == {'price': {'$gte': 10, '$lte': 50}}


def test_zero_bound_is_kept():
    built = QueryBuilder().range('price', 0, None).build()
    assert built.predicate == {'price': {'$gte': 0}}


def test_text_search_escapes_metacharacters():
    """a.b*c 는 정규식이 아니라 리터럴 부분 문자열로 검색되어야 합니다."""
    clause = TextSearch(('name',), 'a.b*c')
    pattern = clause.to_predicate()['name']['$regex']
    assert pattern == re.escape('a.b*c')
    assert re.search(pattern, 'xa.b*cx', re.IGNORECASE)
    assert not re.search(pattern, 'aXbbbc', re.IGNORECASE)


def test_product_search_includes_tags_for_plain_text():
    built = build_product_query(normalize_product_filters({'search': 'Chew'}))
    searched = [list(c.keys())[0] for c in built.predicate['$or']]
    assert searched == ['name', 'description', 'brand', 'tags']
    assert built.predicate['$or'][0]['name'] == {'$regex': 'Chew', '$options': 'i'}


def test_product_search_skips_tags_for_identifier_shaped_text():
    built = build_product_query(normalize_product_filters({'search': str(ObjectId())}))
    searched = [list(c.keys())[0] for c in built.predicate['$or']]
    assert 'tags' not in searched


def test_category_identifier_is_used_by_value():
    category_id = ObjectId()
    built = build_product_query(normalize_product_filters({}), category_id)
    assert built.predicate == {'category': category_id}
    assert built.applied_filters()['criteria'] == {'category': str(category_id)}


def test_product_query_composition():
    criteria = normalize_product_filters({
        'brand': 'Acme', 'petType': 'dog', 'minPrice': '10', 'inStock': 'true', 'isActive': 'false'
    })
    built = build_product_query(criteria)
    assert built.predicate == {
        'brand': {'$regex': 'Acme', '$options': 'i'},
        'specifications.petType': 'dog',
        'price': {'$gte': 10.0},
        'is_in_stock': True,
        'is_active': False
    }
    assert built.applied is True


def test_unsatisfiable_query_counts_as_applied():
    built = build_product_query(normalize_product_filters({}), unsatisfiable=True)
    assert built.predicate == {}
    assert built.applied is True


def test_pet_query_composition():
    breed_id, color_id = ObjectId(), ObjectId()
    criteria = normalize_pet_filters({
        'breed': str(breed_id), 'color': str(color_id), 'gender': 'Female',
        'size': 'Large', 'location': 'Seoul', 'isAvailable': 'true', 'maxPrice': '300'
    })
    built = build_pet_query(criteria)
    assert built.predicate == {
        'breed': breed_id,
        'gender': 'Female',
        'size': 'Large',
        'color': color_id,
        'location': 'Seoul',
        'is_available': True,
        'price': {'$lte': 300.0}
    }
    assert len(built.clauses) == 7


def test_staff_query_always_filters_role():
    built = build_staff_query(normalize_staff_filters({}))
    assert built.predicate == {'role': 'staff'}
    assert built.clauses == [ExactMatch('role', 'staff')]


def test_duplicate_clause_key_is_rejected():
    with pytest.raises(ValueError):
        QueryBuilder().exact('price', 10).range('price', 5, 20).build()
