# petshop/core/database.py
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from pymongo import ASCENDING, MongoClient
from pymongo.client_session import ClientSession

logger = logging.getLogger(__name__)

# 컬렉션 이름
PETS = 'pets'
PRODUCTS = 'products'
CATEGORIES = 'categories'
BREEDS = 'breeds'
COLORS = 'colors'
USERS = 'users'


class MongoStore:
    """
    MongoDB 연결을 소유하는 저장소 객체.
    create_app에서 한 번 생성되어 각 서비스에 주입됩니다.
    """

    def __init__(self, client: Optional[MongoClient] = None):
        self.client = client
        self.db = None
        self.use_transactions = False

    def init_app(self, app) -> None:
        if self.client is None:
            self.client = MongoClient(app.config['MONGO_URI'], tz_aware=True)
        self.db = self.client[app.config['MONGO_DB_NAME']]
        self.use_transactions = app.config.get('MONGO_USE_TRANSACTIONS', False)
        logger.info(f"MongoDB 연결 완료 (db: {app.config['MONGO_DB_NAME']}, transactions: {self.use_transactions})")

    def collection(self, name: str):
        return self.db[name]

    @contextmanager
    def transaction(self) -> Iterator[Optional[ClientSession]]:
        """
        변경 작업을 하나의 트랜잭션으로 묶습니다.
        트랜잭션을 쓰지 않는 설정(단일 노드, 테스트)에서는 session 없이 실행됩니다.
        """
        if not self.use_transactions:
            yield None
            return

        with self.client.start_session() as session:
            with session.start_transaction():
                yield session

    def ensure_indexes(self) -> None:
        """고유 제약과 목록 조회에 필요한 인덱스를 생성합니다."""
        self.collection(CATEGORIES).create_index([('name', ASCENDING)], unique=True)
        self.collection(BREEDS).create_index([('name', ASCENDING)], unique=True)
        self.collection(COLORS).create_index([('name', ASCENDING)], unique=True)
        self.collection(COLORS).create_index([('hex_code', ASCENDING)], unique=True)
        self.collection(USERS).create_index([('email', ASCENDING)], unique=True)

        self.collection(PRODUCTS).create_index([('category', ASCENDING), ('is_active', ASCENDING)])
        self.collection(PRODUCTS).create_index([('price', ASCENDING)])
        self.collection(PETS).create_index([('breed', ASCENDING), ('color', ASCENDING)])
        self.collection(PETS).create_index([('published_date', ASCENDING)])
        logger.info("MongoDB 인덱스 확인 완료")
