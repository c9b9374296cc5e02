# petshop/core/errors.py
"""
애플리케이션 전역에서 사용하는 예외 계층.

서비스 계층은 이 예외들을 던지기만 하고, HTTP 상태 코드로의 변환은
create_app에 등록된 전역 에러 핸들러 한 곳에서 처리합니다.
"""


class AppError(Exception):
    """클라이언트에게 그대로 노출해도 되는 모든 예외의 기반 클래스"""
    status_code = 500
    error_code = 'INTERNAL_SERVER_ERROR'

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code

    def to_dict(self) -> dict:
        return {"error_code": self.error_code, "message": self.message}


class BadRequestError(AppError):
    """잘못된 입력값 (invalid-argument)"""
    status_code = 400
    error_code = 'INVALID_PARAMETER'


class InsufficientStockError(BadRequestError):
    error_code = 'INSUFFICIENT_STOCK'


class NotFoundError(AppError):
    status_code = 404
    error_code = 'NOT_FOUND'


class ConflictError(AppError):
    """고유해야 하는 값(이메일, 이름 등)이 이미 존재하는 경우"""
    status_code = 409
    error_code = 'CONFLICT'
