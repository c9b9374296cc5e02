# petshop/core/config.py

import os # 환경 변수를 읽기 위해 사용합니다.


def _env_flag(name: str, default: str) -> bool:
    """'true'/'1'/'yes' 형태의 환경 변수를 bool로 해석합니다."""
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes')


class Config:
    """모든 환경 설정의 기반이 되는 공통 설정 클래스입니다."""
    # 토큰 서명/검증에 사용하는 키. 로그인은 외부 인증 서비스가 담당하고 이 서버는 검증만 합니다.
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')

    # MongoDB 연결 정보
    MONGO_URI = os.getenv('MONGO_URI', 'mongodb://localhost:27017')
    MONGO_DB_NAME = os.getenv('MONGO_DB_NAME', 'petshop')
    # 다중 문서 트랜잭션은 replica set 환경에서만 동작합니다.
    MONGO_USE_TRANSACTIONS = _env_flag('MONGO_USE_TRANSACTIONS', 'true')

    # 모든 블루프린트가 등록되는 기본 경로
    API_PREFIX = os.getenv('API_PREFIX', '/api')

    # 목록 API의 기본 페이지 크기
    PRODUCT_PAGE_SIZE = int(os.getenv('PRODUCT_PAGE_SIZE', 15))
    PET_PAGE_SIZE = int(os.getenv('PET_PAGE_SIZE', 10))
    STAFF_PAGE_SIZE = int(os.getenv('STAFF_PAGE_SIZE', 10))
    MAX_PAGE_SIZE = int(os.getenv('MAX_PAGE_SIZE', 100))

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    """개발 환경을 위한 설정 클래스입니다."""
    DEBUG = True


class TestingConfig(Config):
    """테스트 환경을 위한 설정 클래스입니다. mongomock 클라이언트와 함께 사용됩니다."""
    TESTING = True
    DEBUG = False
    MONGO_DB_NAME = os.getenv('TEST_MONGO_DB_NAME', 'petshop_test')
    MONGO_USE_TRANSACTIONS = False
    JWT_SECRET_KEY = os.getenv('TEST_JWT_SECRET_KEY', 'test-secret-key-with-enough-length-for-hs256')


class ProductionConfig(Config):
    """운영 환경 설정입니다."""
    DEBUG = False


# FLASK_ENV 값에 따라 create_app에서 설정 클래스를 선택합니다.
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
