# pixfeed/models/comment.py
from dataclasses import dataclass, field
from datetime import datetime

from pixfeed.utils.datetime_utils import DateTimeUtils

@dataclass
class Comment:
    """
    Post 문서의 'comments' 배열에 포함되는 댓글 구조.
    댓글은 별도 컬렉션 없이 게시물 문서 안에만 존재합니다.
    """
    comment_id: str
    user: str  # 작성자 user_id
    text: str
    created_at: datetime = field(default_factory=DateTimeUtils.now)
