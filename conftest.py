# conftest.py
"""
공용 pytest 픽스처.
앱은 TestingConfig + mongomock 클라이언트로 생성되며, 테스트마다 새 인메모리 DB를 사용합니다.
"""

import mongomock
import pytest
from bson import ObjectId

from petshop import create_app
from petshop.core.security import create_access_token


@pytest.fixture
def app():
    app = create_app('testing', mongo_client=mongomock.MongoClient())
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    return app.store


@pytest.fixture
def make_headers(app):
    """role과 (선택) 사용자 ID로 Authorization 헤더를 만듭니다."""
    def _make_headers(role: str, user_id: ObjectId = None) -> dict:
        with app.app_context():
            token = create_access_token({"sub": str(user_id or ObjectId()), "role": role})
        return {"Authorization": f"Bearer {token}"}
    return _make_headers


@pytest.fixture
def staff_headers(make_headers):
    return make_headers('staff')


@pytest.fixture
def admin_headers(make_headers):
    return make_headers('admin')


@pytest.fixture
def customer_headers(make_headers):
    return make_headers('customer')
