# pixfeed/api/comments/services.py

import logging
import uuid
from dataclasses import asdict
from typing import Dict, Any

from firebase_admin import firestore
from google.api_core.exceptions import NotFound as DocumentNotFound

from pixfeed.api.users.services import UserService
from pixfeed.core.exceptions import NotFoundError
from pixfeed.models.comment import Comment
from pixfeed.utils.datetime_utils import DateTimeUtils

class CommentService:
    """
    댓글 관련 비즈니스 로직을 담당하는 서비스 클래스.
    댓글은 게시물 문서의 'comments' 배열에 추가됩니다.
    """
    def __init__(self, db, user_service: UserService):
        """서비스 초기화 시 Firestore 클라이언트 및 컬렉션 참조를 설정합니다."""
        self.db = db
        self.posts_ref = self.db.collection('posts')
        self.user_service = user_service

    def create_comment(self, post_id: str, user_id: str, text: str) -> Dict[str, Any]:
        """
        새로운 댓글을 게시물에 추가하고, 작성자 정보가 확장된 댓글만 반환합니다.

        게시물 존재 여부를 먼저 확인하므로 게시물이 없으면 사용자 조회는 일어나지 않습니다.
        """
        post_ref = self.posts_ref.document(post_id)
        if not post_ref.get().exists:
            raise NotFoundError("Post not found")

        author_data = self.user_service.get_user(user_id)

        new_comment = Comment(comment_id=str(uuid.uuid4()), user=user_id, text=text)
        comment_data = DateTimeUtils.for_firestore(asdict(new_comment))
        try:
            post_ref.update({'comments': firestore.ArrayUnion([comment_data])})
        except DocumentNotFound:
            raise NotFoundError("Post not found")

        logging.info(f"댓글 작성 완료 (post_id: {post_id}, comment_id: {new_comment.comment_id})")
        return {
            **comment_data,
            "user": {
                "user_id": user_id,
                "username": author_data.get("username"),
                "profile_photo": author_data.get("profile_photo"),
            },
        }
