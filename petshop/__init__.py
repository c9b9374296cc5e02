# petshop/__init__.py

# =====================================================================================
# 1. 환경 변수 로드 (가장 먼저 실행)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. 모듈 임포트 (Module Imports)
# =====================================================================================
import os
import logging
from flask import Flask, jsonify
from marshmallow import ValidationError
from pymongo.errors import DuplicateKeyError
from werkzeug.exceptions import HTTPException

# - 설정 / 저장소 / 예외
from petshop.core.config import config_by_name
from petshop.core.database import MongoStore
from petshop.core.errors import AppError

# - API 블루프린트
from petshop.api.products.routes import products_bp
from petshop.api.pets.routes import pets_bp
from petshop.api.categories.routes import categories_bp
from petshop.api.breeds.routes import breeds_bp
from petshop.api.colors.routes import colors_bp
from petshop.api.staff.routes import staff_bp
from petshop.api.users.routes import users_bp

# - 서비스 모듈
from petshop.api.products.services import ProductService
from petshop.api.pets.services import PetService
from petshop.api.categories.services import CategoryService
from petshop.api.breeds.services import BreedService
from petshop.api.colors.services import ColorService
from petshop.api.staff.services import StaffService
from petshop.api.users.services import UserService


def create_app(config_name=None, mongo_client=None):
    """
    Flask 애플리케이션 팩토리 함수.

    Args:
        config_name: 'development' | 'testing' | 'production' (기본값은 FLASK_ENV)
        mongo_client: 이미 생성된 MongoClient (테스트에서는 mongomock 클라이언트)
    """
    # =====================================================================================
    # 3. Flask 앱 생성 및 기본 설정
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False

    if not app.config.get('JWT_SECRET_KEY'):
        raise ValueError("필수 환경 변수가 설정되지 않았습니다: JWT_SECRET_KEY")

    # =====================================================================================
    # 4. 로깅 설정
    # =====================================================================================
    if not app.debug:
        logging.basicConfig(
            level=app.config.get('LOG_LEVEL', 'INFO'),
            format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        )

    # =====================================================================================
    # 5. 저장소 초기화
    # =====================================================================================
    store = MongoStore(mongo_client)
    try:
        store.init_app(app)
        store.ensure_indexes()
    except Exception as e:
        logging.error(f"Failed to initialize MongoDB store: {e}")
        raise
    app.store = store

    # =====================================================================================
    # 6. 서비스 인스턴스 생성 및 'app.services'에 저장 (의존성 주입)
    # =====================================================================================
    max_page_size = app.config['MAX_PAGE_SIZE']

    app.services = {}
    # - 참조 데이터
    app.services['categories'] = CategoryService(store)
    app.services['breeds'] = BreedService(store)
    app.services['colors'] = ColorService(store)

    # - 목록 조회가 있는 도메인
    app.services['products'] = ProductService(store, app.config['PRODUCT_PAGE_SIZE'], max_page_size)
    app.services['pets'] = PetService(store, app.config['PET_PAGE_SIZE'], max_page_size)
    app.services['staff'] = StaffService(store, app.config['STAFF_PAGE_SIZE'], max_page_size)

    app.services['users'] = UserService(store)
    logging.info("Services initialized successfully")

    # =====================================================================================
    # 7. 블루프린트 등록
    # =====================================================================================
    api_prefix = app.config['API_PREFIX'].rstrip('/')
    app.register_blueprint(products_bp, url_prefix=f'{api_prefix}/products')
    app.register_blueprint(pets_bp, url_prefix=f'{api_prefix}/pets')
    app.register_blueprint(categories_bp, url_prefix=f'{api_prefix}/categories')
    app.register_blueprint(breeds_bp, url_prefix=f'{api_prefix}/breeds')
    app.register_blueprint(colors_bp, url_prefix=f'{api_prefix}/colors')
    app.register_blueprint(staff_bp, url_prefix=f'{api_prefix}/staff')
    app.register_blueprint(users_bp, url_prefix=f'{api_prefix}/users')

    # =====================================================================================
    # 8. 전역 에러 핸들러 설정
    # =====================================================================================
    @app.errorhandler(AppError)
    def handle_app_error(err):
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        response = {"error_code": "VALIDATION_ERROR", "message": "Validation failed", "details": err.messages}
        return jsonify(response), 400

    @app.errorhandler(DuplicateKeyError)
    def handle_duplicate_key(err):
        logging.warning(f"Duplicate key: {err}")
        return jsonify({"error_code": "CONFLICT", "message": "Resource already exists"}), 409

    @app.errorhandler(HTTPException)
    def handle_http_exception(err):
        response = {"error_code": err.name.upper().replace(' ', '_'), "message": err.description}
        return jsonify(response), err.code

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        # 다른 핸들러에서 처리되지 않은 모든 예외를 여기서 처리
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        response = {"error_code": "INTERNAL_SERVER_ERROR", "message": "서버 내부에서 예상치 못한 오류가 발생했습니다."}
        return jsonify(response), 500

    logging.info(f"Flask app created for '{config_name}' environment.")

    return app
