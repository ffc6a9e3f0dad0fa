# pixfeed/api/posts/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException

from pixfeed.api.posts.schemas import (
    PostCreateSchema, LikeToggleSchema, PostResponseSchema, PopulatedPostResponseSchema
)
from pixfeed.core.exceptions import (
    ApiError, BadRequestError, validation_error_response, internal_error_response
)

posts_bp = Blueprint('posts_bp', __name__)

@posts_bp.route('/CreatePost', methods=['POST'])
def create_post():
    """
    새로운 게시글을 생성합니다. (multipart/form-data)
    - title, description, user_id 필드와 선택적인 image 파일을 받습니다.
    - 성공 시, 생성된 게시글 정보를 201 Created 상태 코드와 함께 반환합니다.
    """
    post_service = current_app.services['posts']
    try:
        data = PostCreateSchema().load(request.form.to_dict())
        new_post = post_service.create_post(
            data['user_id'], data['title'], data['description'],
            image=request.files.get('image')
        )
        return jsonify({
            "success": True,
            "message": "Post created successfully",
            "post": PostResponseSchema().dump(new_post)
        }), 201
    except ValidationError as err:
        return validation_error_response(err)
    except ApiError as e:
        return e.to_response()
    except HTTPException:
        # 413 등 요청 파싱 단계의 werkzeug 예외는 전역 핸들러에서 처리
        raise
    except Exception as e:
        logging.error(f"게시글 생성 중 오류 발생: {e}", exc_info=True)
        return internal_error_response("Error creating post")


@posts_bp.route('/getPosts', methods=['GET'])
def get_posts():
    """특정 사용자(userId)의 게시글 목록을 작성자/댓글 작성자 정보와 함께 조회합니다."""
    post_service = current_app.services['posts']
    user_id = request.args.get('userId', None, type=str)
    try:
        if not user_id:
            raise BadRequestError("User ID is required")
        posts = post_service.get_posts_by_user_id(user_id)
        return jsonify({
            "success": True,
            "message": "Successful",
            "data": PopulatedPostResponseSchema(many=True).dump(posts)
        }), 200
    except ApiError as e:
        return e.to_response()
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"게시글 목록 조회 중 오류 발생 (user_id: {user_id}): {e}", exc_info=True)
        return internal_error_response()


@posts_bp.route('/deletePost/<string:post_id>', methods=['DELETE'])
def delete_post(post_id: str):
    """특정 게시글을 삭제합니다."""
    post_service = current_app.services['posts']
    try:
        post_service.delete_post(post_id)
        return jsonify({"success": True, "message": "Post deleted successfully"}), 200
    except ApiError as e:
        return e.to_response()
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"게시글 삭제 중 오류 발생 (post_id: {post_id}): {e}", exc_info=True)
        return internal_error_response()


@posts_bp.route('/posts/<string:post_id>/like', methods=['POST'])
def toggle_post_like(post_id: str):
    """
    게시글의 좋아요를 누르거나 취소합니다.
    같은 userId로 다시 호출하면 이전 상태로 돌아갑니다.
    """
    post_service = current_app.services['posts']
    try:
        data = LikeToggleSchema().load(request.get_json(silent=True) or {})
        post = post_service.toggle_post_like(data['user_id'], post_id)
        return jsonify({"success": True, "post": PostResponseSchema().dump(post)}), 200
    except ValidationError as err:
        return validation_error_response(err)
    except ApiError as e:
        return e.to_response()
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"좋아요 처리 중 오류 발생 (post_id: {post_id}): {e}", exc_info=True)
        return internal_error_response()
