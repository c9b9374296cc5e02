from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any

from petshop.utils.datetime_utils import DateTimeUtils


class UserRole(Enum):
    CUSTOMER = "customer"
    STAFF = "staff"
    ADMIN = "admin"


@dataclass
class User:
    """
    MongoDB 'users' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    직원(staff)은 별도 컬렉션이 아니라 role이 'staff'인 사용자 문서입니다.
    password에는 해시값만 저장합니다.
    """
    name: str
    email: str
    password: str
    role: UserRole = UserRole.CUSTOMER
    is_active: bool = True
    avatar_url: Optional[str] = None
    last_login: Optional[datetime] = None
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    updated_at: datetime = field(default_factory=DateTimeUtils.now)

    def to_document(self) -> Dict[str, Any]:
        document = asdict(self)
        document['role'] = self.role.value
        return document
