# pixfeed/models/post.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Dict, Any

from pixfeed.utils.datetime_utils import DateTimeUtils

@dataclass
class Post:
    """
    Firestore 'posts' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    """
    post_id: str
    title: str
    description: str
    user: str  # 작성자 user_id (조회 시점에 작성자 정보로 확장)
    image: Optional[str] = None
    likes: List[str] = field(default_factory=list)
    comments: List[Dict[str, Any]] = field(default_factory=list)
    created_at: datetime = field(default_factory=DateTimeUtils.now)
