from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Optional, List, Dict, Any
from enum import Enum

from bson import ObjectId

from petshop.utils.datetime_utils import DateTimeUtils


class PetGender(Enum):
    MALE = "Male"
    FEMALE = "Female"


class PetSize(Enum):
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"


@dataclass
class Pet:
    """
    MongoDB 'pets' 컬렉션 문서 구조.
    판매 중인 반려동물 한 마리의 정보와 건강 관련 플래그를 관리합니다.
    breed, color는 각각 'breeds', 'colors' 컬렉션 문서의 ObjectId 참조입니다.
    """
    name: str
    breed: ObjectId
    gender: PetGender
    age: str
    size: PetSize
    color: ObjectId
    price: float
    images: List[str]
    location: str
    description: Optional[str] = None
    is_vaccinated: bool = False
    is_dewormed: bool = False
    has_cert: bool = False
    has_microchip: bool = False
    additional_info: Optional[str] = None
    is_available: bool = True
    published_date: datetime = field(default_factory=DateTimeUtils.now)
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    updated_at: datetime = field(default_factory=DateTimeUtils.now)

    def __post_init__(self):
        if not self.images:
            raise ValueError("At least one image is required")
        if self.price < 0:
            raise ValueError("Price must be greater than or equal to 0")

    def to_document(self) -> Dict[str, Any]:
        """저장용 딕셔너리로 변환합니다. Enum은 문자열 값으로 저장합니다."""
        document = asdict(self)
        document['gender'] = self.gender.value
        document['size'] = self.size.value
        return document
