# pixfeed/api/users/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException

from pixfeed.api.users.schemas import RegisterSchema, LoginSchema, UserResponseSchema
from pixfeed.core.exceptions import ApiError, validation_error_response, internal_error_response

users_bp = Blueprint('users_bp', __name__)

@users_bp.route('/getUser/<string:user_id>', methods=['GET'])
def get_user(user_id: str):
    """특정 사용자의 정보를 조회합니다. (비밀번호 해시 제외)"""
    user_service = current_app.services['users']
    try:
        user = user_service.get_user(user_id)
        return jsonify({"success": True, "data": UserResponseSchema().dump(user)}), 200
    except ApiError as e:
        return e.to_response()
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"사용자 조회 중 오류 발생 (user_id: {user_id}): {e}", exc_info=True)
        return internal_error_response()


@users_bp.route('/register', methods=['POST'])
def register():
    """
    회원가입 (multipart/form-data)
    - username, email, password 필드와 선택적인 profilePhoto 파일을 받습니다.
    - 성공 시, 생성된 사용자 정보를 201 Created 상태 코드와 함께 반환합니다.
    """
    user_service = current_app.services['users']
    try:
        data = RegisterSchema().load(request.form.to_dict())
        new_user = user_service.register_user(
            data['username'], data['email'], data['password'],
            profile_photo=request.files.get('profilePhoto')
        )
        return jsonify({
            "success": True,
            "message": "User registered successfully",
            "user": UserResponseSchema().dump(new_user)
        }), 201
    except ValidationError as err:
        return validation_error_response(err)
    except ApiError as e:
        return e.to_response()
    except HTTPException:
        # 413 등 요청 파싱 단계의 werkzeug 예외는 전역 핸들러에서 처리
        raise
    except Exception as e:
        logging.error(f"회원가입 중 오류 발생: {e}", exc_info=True)
        return internal_error_response()


@users_bp.route('/login', methods=['POST'])
def login():
    """username/password로 로그인합니다. 토큰은 발급하지 않고 사용자 정보만 반환합니다."""
    user_service = current_app.services['users']
    try:
        data = LoginSchema().load(request.get_json(silent=True) or {})
        user = user_service.authenticate(data['username'], data['password'])
        return jsonify({
            "success": True,
            "message": "Login successful",
            "user": UserResponseSchema().dump(user)
        }), 200
    except ValidationError as err:
        return validation_error_response(err)
    except ApiError as e:
        return e.to_response()
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"로그인 처리 중 오류 발생: {e}", exc_info=True)
        return internal_error_response()
