# petshop/api/users/services.py
import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import DESCENDING
from werkzeug.security import check_password_hash, generate_password_hash

from petshop.core.database import USERS, MongoStore
from petshop.core.errors import BadRequestError, ConflictError, NotFoundError
from petshop.models.user import UserRole
from petshop.utils.datetime_utils import DateTimeUtils

logger = logging.getLogger(__name__)

# 응답/조회에서 비밀번호 해시를 제외합니다.
WITHOUT_PASSWORD = {'password': 0}


class UserService:
    """
    사용자 본인 정보 관리와 관리자의 고객 계정 관리 로직을 처리하는 서비스 클래스.
    """

    def __init__(self, store: MongoStore):
        self.store = store
        self.users = store.collection(USERS)

    def get_user(self, user_id: ObjectId) -> Dict[str, Any]:
        user = self.users.find_one({'_id': user_id}, WITHOUT_PASSWORD)
        if not user:
            raise NotFoundError('User not found', 'USER_NOT_FOUND')
        return user

    def update_profile(self, user_id: ObjectId, data: Dict[str, Any]) -> Dict[str, Any]:
        """이름/이메일을 수정합니다. 다른 사용자가 쓰는 이름이나 이메일이면 409."""
        self.get_user(user_id)
        for field_name in ('email', 'name'):
            if field_name in data:
                ensure_unique_user_field(self.users, field_name, data[field_name], exclude_id=user_id)

        self.users.update_one({'_id': user_id}, {'$set': dict(data, updated_at=DateTimeUtils.now())})
        logger.info(f"프로필 수정 완료: {user_id} (fields: {sorted(data)})")
        return self.get_user(user_id)

    def change_password(self, user_id: ObjectId, current_password: str, new_password: str) -> None:
        user = self.users.find_one({'_id': user_id}, {'password': 1})
        if not user:
            raise NotFoundError('User not found', 'USER_NOT_FOUND')

        if not check_password_hash(user.get('password', ''), current_password):
            logger.warning(f"비밀번호 변경 실패 (현재 비밀번호 불일치): {user_id}")
            raise BadRequestError('Current password is incorrect', 'INVALID_PASSWORD')
        if current_password == new_password:
            raise BadRequestError('New password must be different from the current password', 'SAME_PASSWORD')

        self.users.update_one(
            {'_id': user_id},
            {'$set': {'password': generate_password_hash(new_password), 'updated_at': DateTimeUtils.now()}}
        )
        logger.info(f"비밀번호 변경 완료: {user_id}")

    def list_customers(self) -> List[Dict[str, Any]]:
        """[관리자] 직원/관리자를 제외한 고객 계정을 최신 가입순으로 조회합니다."""
        query = {'role': {'$nin': [UserRole.STAFF.value, UserRole.ADMIN.value]}}
        customers = list(self.users.find(query, WITHOUT_PASSWORD).sort([('created_at', DESCENDING), ('_id', DESCENDING)]))
        logger.info(f"고객 목록 조회 완료: {len(customers)}명")
        return customers

    def update_status(self, user_id: ObjectId, is_active: bool, reason: Optional[str] = None) -> Dict[str, Any]:
        """[관리자] 계정 활성 상태를 변경합니다. 사유는 로그로만 남깁니다."""
        self.get_user(user_id)
        self.users.update_one(
            {'_id': user_id},
            {'$set': {'is_active': is_active, 'updated_at': DateTimeUtils.now()}}
        )
        logger.info(f"계정 상태 변경: {user_id} -> {'활성' if is_active else '비활성'} (사유: {reason or '-'})")
        return self.get_user(user_id)


def ensure_unique_user_field(users, field_name: str, value: Any, exclude_id: Optional[ObjectId] = None,
                             session=None) -> None:
    """users 컬렉션 전체에서 field_name 값이 고유한지 확인합니다. 이미 있으면 409."""
    query = {field_name: value}
    if exclude_id is not None:
        query['_id'] = {'$ne': exclude_id}
    if users.find_one(query, {'_id': 1}, session=session):
        logger.warning(f"사용자 {field_name} 중복: {value}")
        raise ConflictError(f"{field_name.capitalize()} already exists", f"{field_name.upper()}_EXISTS")
