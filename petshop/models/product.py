from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Optional, List, Dict, Any

from bson import ObjectId

from petshop.utils.datetime_utils import DateTimeUtils


@dataclass
class Product:
    """
    MongoDB 'products' 컬렉션 문서 구조.
    category는 활성 상태인 'categories' 문서의 ObjectId 참조여야 합니다.
    """
    name: str
    category: ObjectId
    brand: str
    price: float
    description: str
    images: List[str]
    stock: int
    specifications: Dict[str, Any] = field(default_factory=dict)
    original_price: Optional[float] = None
    is_in_stock: Optional[bool] = None
    tags: List[str] = field(default_factory=list)
    gifts: List[str] = field(default_factory=list)
    rating: float = 0
    review_count: int = 0
    is_active: bool = True
    created_by: Optional[ObjectId] = None
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    updated_at: datetime = field(default_factory=DateTimeUtils.now)

    def __post_init__(self):
        if not self.images:
            raise ValueError("At least one image is required")
        if self.stock < 0:
            raise ValueError("Stock cannot be negative")
        # 명시적으로 지정하지 않으면 재고 수량에서 파생합니다.
        if self.is_in_stock is None:
            self.is_in_stock = self.stock > 0

    def to_document(self) -> Dict[str, Any]:
        return asdict(self)
