# pixfeed/api/comments/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException

from pixfeed.api.comments.schemas import CommentCreateSchema, CommentResponseSchema
from pixfeed.core.exceptions import ApiError, validation_error_response, internal_error_response


comments_bp = Blueprint('comments_bp', __name__)

@comments_bp.route('/comment/<string:post_id>', methods=['POST'])
def create_comment(post_id: str):
    """
    특정 게시글에 새로운 댓글을 작성합니다.
    - 요청 본문: {"userId": ..., "text": ...}
    - 성공 시, 생성된 댓글(작성자 정보 포함)만 201 Created 상태 코드와 함께 반환합니다.
    """
    comment_service = current_app.services['comments']
    try:
        data = CommentCreateSchema().load(request.get_json(silent=True) or {})
        new_comment = comment_service.create_comment(post_id, data['user_id'], data['text'])
        return jsonify({
            "success": True,
            "message": "Comment added successfully",
            "comment": CommentResponseSchema().dump(new_comment)
        }), 201
    except ValidationError as err:
        return validation_error_response(err)
    except ApiError as e: # 게시물 또는 작성자가 없는 경우
        return e.to_response()
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"댓글 생성 중 오류 발생 (post_id: {post_id}): {e}", exc_info=True)
        return internal_error_response()
