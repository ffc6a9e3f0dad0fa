# pixfeed/core/exceptions.py
"""
서비스 계층에서 발생시키는 API 예외 정의.

라우트는 ApiError를 잡아 to_response()로 변환하고,
그 외의 예외는 로그를 남긴 뒤 500으로 응답합니다.
"""
from flask import jsonify


class ApiError(Exception):
    status_code = 500
    error_code = "INTERNAL_SERVER_ERROR"
    message = "Internal Server Error"

    def __init__(self, message: str = None, error_code: str = None):
        if message is not None:
            self.message = message
        if error_code is not None:
            self.error_code = error_code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"success": False, "error_code": self.error_code, "error": self.message}

    def to_response(self):
        return jsonify(self.to_dict()), self.status_code


class BadRequestError(ApiError):
    status_code = 400
    error_code = "BAD_REQUEST"
    message = "Required field is missing"


class UnauthorizedError(ApiError):
    status_code = 401
    error_code = "UNAUTHORIZED"
    message = "Invalid username or password"


class NotFoundError(ApiError):
    status_code = 404
    error_code = "NOT_FOUND"
    message = "Resource not found"


class ConflictError(ApiError):
    status_code = 409
    error_code = "CONFLICT"
    message = "Username or email already exists"


def validation_error_response(err):
    """marshmallow ValidationError를 400 응답으로 변환합니다."""
    return jsonify({
        "success": False,
        "error_code": "VALIDATION_ERROR",
        "error": "Required field is missing or invalid",
        "details": err.messages,
    }), 400


def internal_error_response(message: str = "Internal Server Error"):
    return jsonify({"success": False, "error_code": "INTERNAL_SERVER_ERROR", "error": message}), 500
