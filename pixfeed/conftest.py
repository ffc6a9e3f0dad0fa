# pixfeed/conftest.py
"""
테스트 공용 픽스처

실제 Firestore 대신 메모리 기반 대체 객체(FakeFirestore)를 주입하여
create_app('testing', db=...)으로 앱을 생성합니다.

사용법: python -m pytest -v
"""
import copy
import io
import uuid

import pytest
from firebase_admin import firestore
from google.api_core.exceptions import Aborted, NotFound

from pixfeed import create_app


class FakeSnapshot:
    def __init__(self, doc_id, data, reference):
        self.id = doc_id
        self.reference = reference
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return copy.deepcopy(self._data) if self._data is not None else None


class FakeDocument:
    """문서마다 쓰기 버전을 기록하여 트랜잭션 충돌을 감지할 수 있게 합니다."""
    def __init__(self, collection, doc_id):
        self._collection = collection
        self._store = collection._store
        self.id = doc_id

    @property
    def version(self):
        return self._collection._versions.get(self.id, 0)

    def _bump(self):
        self._collection._versions[self.id] = self.version + 1

    def get(self, transaction=None):
        snapshot = FakeSnapshot(self.id, self._store.get(self.id), self)
        if transaction is not None:
            transaction._record_read(self)
        return snapshot

    def set(self, data):
        self._store[self.id] = copy.deepcopy(data)
        self._bump()

    def update(self, data):
        if self.id not in self._store:
            raise NotFound(f"No document to update: {self.id}")
        doc = self._store[self.id]
        for key, value in data.items():
            if isinstance(value, firestore.ArrayUnion):
                current = doc.get(key) or []
                doc[key] = current + [copy.deepcopy(v) for v in value.values if v not in current]
            elif isinstance(value, firestore.ArrayRemove):
                doc[key] = [v for v in doc.get(key) or [] if v not in value.values]
            else:
                doc[key] = copy.deepcopy(value)
        self._bump()

    def delete(self):
        if self._store.pop(self.id, None) is not None:
            self._bump()


class FakeTransaction:
    """
    firestore.transactional 데코레이터가 호출하는 부분만 구현한 트랜잭션.
    읽은 문서의 버전이 커밋 전에 바뀌었으면 Aborted를 발생시켜 재시도를 유도합니다.
    """
    def __init__(self, db, max_attempts=5):
        self._db = db
        self._max_attempts = max_attempts
        self._read_only = False
        self._id = None
        self._reads = []
        self._writes = []

    def _clean_up(self):
        self._reads = []
        self._writes = []
        self._id = None

    def _begin(self, retry_id=None):
        self._id = uuid.uuid4().bytes
        self._db.transaction_attempts += 1

    def _record_read(self, document):
        self._reads.append((document, document.version))
        # 읽기 직후에 끼어드는 다른 요청을 흉내내기 위한 훅 (한 번씩만 실행)
        while self._db.after_transactional_read:
            self._db.after_transactional_read.pop(0)()

    def update(self, document, data):
        self._writes.append((document, data))

    def _commit(self):
        for document, version in self._reads:
            if document.version != version:
                self._clean_up()
                raise Aborted("Transaction contention")
        for document, data in self._writes:
            document.update(data)
        self._clean_up()

    def _rollback(self):
        self._clean_up()


class FakeQuery:
    """equality where, order_by, limit만 지원하는 쿼리"""
    def __init__(self, collection, filters=(), order=None, max_results=None):
        self._collection = collection
        self._filters = filters
        self._order = order
        self._limit = max_results

    def where(self, field, op, value):
        assert op == '==', f"지원하지 않는 연산자: {op}"
        return FakeQuery(self._collection, self._filters + ((field, value),), self._order, self._limit)

    def order_by(self, field, direction='ASCENDING'):
        return FakeQuery(self._collection, self._filters, (field, direction), self._limit)

    def limit(self, count):
        return FakeQuery(self._collection, self._filters, self._order, count)

    def stream(self):
        docs = [
            (doc_id, data) for doc_id, data in self._collection._store.items()
            if all(data.get(field) == value for field, value in self._filters)
        ]
        if self._order:
            field, direction = self._order
            docs.sort(key=lambda item: item[1].get(field), reverse=(direction == 'DESCENDING'))
        if self._limit is not None:
            docs = docs[:self._limit]
        return iter([
            FakeSnapshot(doc_id, data, FakeDocument(self._collection, doc_id)) for doc_id, data in docs
        ])

    def get(self):
        return list(self.stream())


class FakeCollection(FakeQuery):
    def __init__(self, store, versions):
        self._store = store
        self._versions = versions
        super().__init__(self)

    def document(self, doc_id=None):
        return FakeDocument(self, doc_id or uuid.uuid4().hex)


class FakeFirestore:
    """firestore.client()가 반환하는 Client 중 서비스가 사용하는 부분만 흉내냅니다."""
    def __init__(self):
        self.collections = {}
        self._versions = {}
        self.after_transactional_read = []
        self.transaction_attempts = 0

    def collection(self, name):
        return FakeCollection(self.collections.setdefault(name, {}), self._versions.setdefault(name, {}))

    def transaction(self, **kwargs):
        return FakeTransaction(self, **kwargs)


@pytest.fixture
def db():
    return FakeFirestore()


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / 'uploads'


@pytest.fixture
def app(db, upload_dir):
    return create_app('testing', db=db, test_config={'UPLOAD_FOLDER': str(upload_dir)})


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def register_user(client):
    """회원가입 후 응답의 user 객체를 반환하는 헬퍼"""
    def _register(username='alice', email=None, password='secret', photo=None):
        data = {'username': username, 'email': email or f'{username}@example.com', 'password': password}
        if photo is not None:
            data['profilePhoto'] = (io.BytesIO(photo), 'me.png')
        response = client.post('/register', data=data, content_type='multipart/form-data')
        assert response.status_code == 201, response.get_json()
        return response.get_json()['user']
    return _register


@pytest.fixture
def create_post(client):
    """게시글 생성 후 응답의 post 객체를 반환하는 헬퍼"""
    def _create(user_id, title='hello', description='first post', image=None):
        data = {'title': title, 'description': description, 'user_id': user_id}
        if image is not None:
            data['image'] = (io.BytesIO(image), 'photo.JPG')
        response = client.post('/CreatePost', data=data, content_type='multipart/form-data')
        assert response.status_code == 201, response.get_json()
        return response.get_json()['post']
    return _create
