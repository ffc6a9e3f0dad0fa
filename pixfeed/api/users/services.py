# pixfeed/api/users/services.py
import logging
import uuid
from dataclasses import asdict
from typing import Optional, Dict, Any, Iterable

from werkzeug.datastructures import FileStorage

from pixfeed.core.exceptions import ConflictError, NotFoundError, UnauthorizedError
from pixfeed.core.security import hash_password, verify_password
from pixfeed.models.user import User
from pixfeed.services.storage_service import StorageService
from pixfeed.utils.datetime_utils import DateTimeUtils

# 존재하지 않는 사용자와 비밀번호 불일치를 구분하지 않기 위한 공통 메시지
INVALID_CREDENTIALS = "Invalid username or password"


class UserService:
    """
    사용자 관련 비즈니스 로직을 담당하는 서비스 클래스.
    - 회원가입, 로그인, 조회, 게시물/댓글 작성자 정보 확장을 포함합니다.
    """
    def __init__(self, db, storage_service: StorageService):
        self.db = db
        self.users_ref = self.db.collection('users')
        self.storage_service = storage_service

    def get_user(self, user_id: str) -> Dict[str, Any]:
        """user_id로 사용자 문서를 조회합니다. 없으면 NotFoundError."""
        user_doc = self.users_ref.document(user_id).get()
        if not user_doc.exists:
            raise NotFoundError("User not found")
        return DateTimeUtils.from_firestore(user_doc.to_dict())

    def exists(self, user_id: str) -> bool:
        return self.users_ref.document(user_id).get().exists

    def _find_one(self, field: str, value: str) -> Optional[Dict[str, Any]]:
        query = self.users_ref.where(field, '==', value).limit(1).stream()
        user_doc = next(query, None)
        return user_doc.to_dict() if user_doc else None

    def register_user(self, username: str, email: str, password: str,
                      profile_photo: Optional[FileStorage] = None) -> Dict[str, Any]:
        """
        새 사용자를 등록합니다.

        1. username 또는 email 중복 여부 확인 (중복 시 ConflictError, 파일은 저장하지 않음)
        2. 프로필 사진 저장
        3. 비밀번호를 해시하여 문서 저장 (실패 시 저장한 사진을 삭제)
        """
        if self._find_one('username', username) or self._find_one('email', email):
            raise ConflictError("Username or email already exists")

        photo_filename = self.storage_service.save(profile_photo, 'profilePhoto')

        try:
            user_id = str(uuid.uuid4())
            new_user = User(
                user_id=user_id,
                username=username,
                email=email,
                password=hash_password(password),
                profile_photo=photo_filename,
            )
            user_data = DateTimeUtils.for_firestore(asdict(new_user))
            self.users_ref.document(user_id).set(user_data)
        except Exception as e:
            logging.error(f"사용자 저장 실패 (username: {username}): {e}", exc_info=True)
            self.storage_service.delete(photo_filename)
            raise

        logging.info(f"신규 사용자 등록 완료 (user_id: {user_id})")
        return user_data

    def authenticate(self, username: str, password: str) -> Dict[str, Any]:
        """username/password를 확인하고 사용자 문서를 반환합니다."""
        user_data = self._find_one('username', username)
        if not user_data:
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if not verify_password(password, user_data.get('password')):
            raise UnauthorizedError(INVALID_CREDENTIALS)

        return DateTimeUtils.from_firestore(user_data)

    def get_authors(self, user_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        """
        주어진 user_id 목록을 공개 작성자 정보로 확장합니다.
        같은 사용자는 한 번만 조회합니다. 삭제되었거나 없는 사용자는 username이 None입니다.
        """
        authors = {}
        for user_id in user_ids:
            if user_id in authors:
                continue
            user_doc = self.users_ref.document(user_id).get() if user_id else None
            user_data = user_doc.to_dict() if user_doc and user_doc.exists else {}
            authors[user_id] = {
                "user_id": user_id,
                "username": user_data.get("username"),
                "profile_photo": user_data.get("profile_photo"),
            }
        return authors
