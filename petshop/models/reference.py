from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Optional, Dict, Any

from bson import ObjectId

from petshop.utils.datetime_utils import DateTimeUtils


@dataclass
class Category:
    """'categories' 컬렉션 문서. name은 고유해야 합니다."""
    name: str
    description: Optional[str] = None
    is_active: bool = True
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    updated_at: datetime = field(default_factory=DateTimeUtils.now)

    def to_document(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Breed:
    """'breeds' 컬렉션 문서. 등록한 직원(created_by)을 함께 기록합니다."""
    name: str
    created_by: ObjectId
    description: Optional[str] = None
    is_active: bool = True
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    updated_at: datetime = field(default_factory=DateTimeUtils.now)

    def to_document(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Color:
    """'colors' 컬렉션 문서. name과 hex_code 모두 고유해야 합니다."""
    name: str
    hex_code: str
    description: Optional[str] = None
    is_active: bool = True
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    updated_at: datetime = field(default_factory=DateTimeUtils.now)

    def to_document(self) -> Dict[str, Any]:
        return asdict(self)
