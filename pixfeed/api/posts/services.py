# pixfeed/api/posts/services.py
import logging
import uuid
from dataclasses import asdict
from typing import Optional, Dict, Any, List

from firebase_admin import firestore
from google.api_core.exceptions import NotFound as DocumentNotFound
from werkzeug.datastructures import FileStorage

from pixfeed.api.users.services import UserService
from pixfeed.core.exceptions import NotFoundError
from pixfeed.models.post import Post
from pixfeed.services.storage_service import StorageService
from pixfeed.utils.datetime_utils import DateTimeUtils


class PostService:
    """
    게시글 관련 비즈니스 로직을 담당하는 서비스 클래스.
    게시글 생성/조회/삭제와 좋아요 토글을 포함합니다.
    """
    def __init__(self, db, storage_service: StorageService, user_service: UserService):
        self.db = db
        self.posts_ref = self.db.collection('posts')
        self.storage_service = storage_service
        self.user_service = user_service

    def create_post(self, user_id: str, title: str, description: str,
                    image: Optional[FileStorage] = None) -> Dict[str, Any]:
        """새로운 게시글을 생성하고 Firestore에 저장합니다."""
        # 1. 작성자 확인 (이미지를 저장하기 전에 검사)
        if not self.user_service.exists(user_id):
            raise NotFoundError("User not found")

        # 2. 이미지 저장 후 게시글 문서 생성
        image_filename = self.storage_service.save(image, 'image')
        try:
            post_id = str(uuid.uuid4())
            new_post = Post(
                post_id=post_id, title=title, description=description,
                user=user_id, image=image_filename
            )
            post_data = DateTimeUtils.for_firestore(asdict(new_post))
            self.posts_ref.document(post_id).set(post_data)
        except Exception as e:
            # 3. 문서 저장에 실패하면 방금 저장한 이미지도 정리
            logging.error(f"게시글 생성 실패 (user_id: {user_id}): {e}", exc_info=True)
            self.storage_service.delete(image_filename)
            raise

        logging.info(f"게시글 생성 완료 (post_id: {post_id}, user_id: {user_id})")
        return post_data

    def get_post(self, post_id: str) -> Dict[str, Any]:
        post_doc = self.posts_ref.document(post_id).get()
        if not post_doc.exists:
            raise NotFoundError("Post not found")
        return DateTimeUtils.from_firestore(post_doc.to_dict())

    def get_posts_by_user_id(self, user_id: str) -> List[Dict[str, Any]]:
        """특정 사용자가 작성한 게시물 전체를 작성 순서대로 조회하고 작성자 정보를 확장합니다."""
        query = self.posts_ref.where('user', '==', user_id).order_by('created_at', direction=firestore.Query.ASCENDING)
        posts = [DateTimeUtils.from_firestore(doc.to_dict()) for doc in query.stream()]
        return self.populate(posts)

    def populate(self, posts: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """게시물과 댓글의 user 필드(user_id)를 작성자 공개 정보로 교체합니다."""
        user_ids = []
        for post in posts:
            user_ids.append(post.get('user'))
            user_ids.extend(c.get('user') for c in post.get('comments') or [])

        authors = self.user_service.get_authors(user_ids)
        for post in posts:
            post['user'] = authors.get(post.get('user'))
            post['comments'] = [
                {**comment, 'user': authors.get(comment.get('user'))}
                for comment in post.get('comments') or []
            ]
        return posts

    def delete_post(self, post_id: str) -> None:
        """게시글을 삭제하고, 첨부 이미지 파일도 함께 정리합니다."""
        post_ref = self.posts_ref.document(post_id)
        post_doc = post_ref.get()
        if not post_doc.exists:
            raise NotFoundError("Post not found")

        post_ref.delete()
        self.storage_service.delete(post_doc.to_dict().get('image'))
        logging.info(f"게시글 삭제 완료 (post_id: {post_id})")

    def toggle_post_like(self, user_id: str, post_id: str) -> Dict[str, Any]:
        """
        게시글 좋아요를 누르거나 취소하고, 갱신된 게시글 문서를 반환합니다.
        조회와 변경을 한 트랜잭션에서 수행하므로, 같은 게시글에 대한 동시 요청이 있으면
        Firestore가 트랜잭션을 재시도하여 요청마다 정확히 한 번씩 상태가 바뀝니다.
        """
        transaction = self.db.transaction()

        @firestore.transactional
        def _toggle_like_in_transaction(transaction, post_ref):
            post_doc = post_ref.get(transaction=transaction)
            if not post_doc.exists:
                raise NotFoundError("Post not found")

            if user_id in (post_doc.to_dict().get('likes') or []):
                # 이미 좋아요를 누른 상태 -> 좋아요 취소
                transaction.update(post_ref, {'likes': firestore.ArrayRemove([user_id])})
            else:
                transaction.update(post_ref, {'likes': firestore.ArrayUnion([user_id])})

        try:
            _toggle_like_in_transaction(transaction, self.posts_ref.document(post_id))
        except DocumentNotFound:
            # 조회 이후 다른 요청에서 삭제된 경우
            raise NotFoundError("Post not found")

        return self.get_post(post_id)
