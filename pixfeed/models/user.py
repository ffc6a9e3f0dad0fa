# pixfeed/models/user.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from pixfeed.utils.datetime_utils import DateTimeUtils

@dataclass
class User:
    """
    Firestore 'users' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    password에는 bcrypt 해시만 저장됩니다.
    """
    user_id: str
    username: str
    email: str
    password: str
    profile_photo: Optional[str] = None # 업로드 디렉터리 기준 파일명
    created_at: datetime = field(default_factory=DateTimeUtils.now)
