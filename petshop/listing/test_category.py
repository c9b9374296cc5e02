# petshop/listing/test_category.py
"""
카테고리 토큰 해석 테스트
"""

import mongomock
import pytest
from bson import ObjectId

from petshop.listing.category import (
    CategoryById, CategoryByName, CategoryResolver, parse_category_token
)


def test_parse_category_token():
    object_id = ObjectId()
    assert parse_category_token(None) is None
    assert parse_category_token('') is None
    assert parse_category_token('all') is None
    assert parse_category_token(str(object_id)) == CategoryById(object_id)
    assert parse_category_token('Dog Food') == CategoryByName('Dog Food')
    # 12자리 문자열은 ObjectId로 해석하지 않습니다.
    assert parse_category_token('abcdefghijkl') == CategoryByName('abcdefghijkl')


@pytest.fixture
def categories():
    collection = mongomock.MongoClient().db.categories
    collection.insert_many([
        {'name': 'Dog Food', 'is_active': True},
        {'name': 'dog food', 'is_active': False},
        {'name': 'Cat Toys', 'is_active': True},
        {'name': 'Toys (Old)', 'is_active': True},
        {'name': 'Retired', 'is_active': False},
    ])
    return collection


def test_resolve_by_id_is_used_verbatim(categories):
    object_id = ObjectId()
    assert CategoryResolver(categories).resolve(CategoryById(object_id)) == object_id


def test_resolve_exact_name(categories):
    expected = categories.find_one({'name': 'Dog Food'})['_id']
    assert CategoryResolver(categories).resolve(CategoryByName('Dog Food')) == expected


def test_resolve_case_insensitive_name(categories):
    expected = categories.find_one({'name': 'Cat Toys'})['_id']
    assert CategoryResolver(categories).resolve(CategoryByName('CAT TOYS')) == expected


def test_resolve_name_with_regex_metacharacters(categories):
    expected = categories.find_one({'name': 'Toys (Old)'})['_id']
    resolver = CategoryResolver(categories)
    assert resolver.resolve(CategoryByName('toys (old)')) == expected
    assert resolver.resolve(CategoryByName('Toys .*')) is None


def test_resolve_ignores_inactive_and_partial_matches(categories):
    resolver = CategoryResolver(categories)
    assert resolver.resolve(CategoryByName('Retired')) is None
    assert resolver.resolve(CategoryByName('Dog')) is None
