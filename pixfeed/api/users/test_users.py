# pixfeed/api/users/test_users.py
"""회원가입/로그인/사용자 조회 API 테스트"""
import io
import os

from pixfeed import create_app


def test_register_returns_user_without_password(client, db):
    response = client.post('/register', data={
        'username': 'alice', 'email': 'alice@example.com', 'password': 'secret'
    }, content_type='multipart/form-data')

    assert response.status_code == 201
    body = response.get_json()
    assert body['success'] is True
    assert body['user']['username'] == 'alice'
    assert 'password' not in body['user']

    # 저장된 문서에는 평문이 아닌 해시가 들어 있어야 함
    stored = db.collections['users'][body['user']['user_id']]
    assert stored['password'] != 'secret'
    assert stored['password'].startswith('$2')


def test_register_duplicate_username_conflict(client, register_user):
    register_user('alice', email='alice@example.com')

    response = client.post('/register', data={
        'username': 'alice', 'email': 'other@example.com', 'password': 'secret'
    }, content_type='multipart/form-data')

    assert response.status_code == 409
    assert response.get_json()['success'] is False


def test_register_duplicate_email_conflict(client, register_user):
    register_user('alice', email='alice@example.com')

    response = client.post('/register', data={
        'username': 'bob', 'email': 'alice@example.com', 'password': 'secret'
    }, content_type='multipart/form-data')

    assert response.status_code == 409


def test_register_missing_field(client, db):
    response = client.post('/register', data={'username': 'alice'}, content_type='multipart/form-data')

    assert response.status_code == 400
    assert response.get_json()['error_code'] == 'VALIDATION_ERROR'
    assert db.collections.get('users', {}) == {}


def test_register_with_profile_photo(client, upload_dir, register_user):
    user = register_user('alice', photo=b'fake-png-bytes')

    assert user['profile_photo'].startswith('profilePhoto-')
    assert user['profile_photo'].endswith('.png')
    assert user['profile_photo_url'] == f"/uploads/{user['profile_photo']}"
    assert os.path.exists(os.path.join(upload_dir, user['profile_photo']))


def test_register_conflict_does_not_store_photo(client, upload_dir, register_user):
    register_user('alice')

    response = client.post('/register', data={
        'username': 'alice', 'email': 'new@example.com', 'password': 'secret',
        'profilePhoto': (io.BytesIO(b'bytes'), 'me.png'),
    }, content_type='multipart/form-data')

    assert response.status_code == 409
    assert os.listdir(upload_dir) == []


def test_login_success(client, register_user):
    user = register_user('alice', password='secret')

    response = client.post('/login', json={'username': 'alice', 'password': 'secret'})

    assert response.status_code == 200
    body = response.get_json()
    assert body['user']['user_id'] == user['user_id']
    assert 'password' not in body['user']


def test_login_failures_share_same_message(client, register_user):
    register_user('alice', password='secret')

    wrong_password = client.post('/login', json={'username': 'alice', 'password': 'nope'})
    unknown_user = client.post('/login', json={'username': 'nobody', 'password': 'secret'})

    assert wrong_password.status_code == 401
    assert unknown_user.status_code == 401
    assert wrong_password.get_json()['error'] == unknown_user.get_json()['error']


def test_login_missing_field(client):
    response = client.post('/login', json={'username': 'alice'})
    assert response.status_code == 400


def test_get_user(client, register_user):
    user = register_user('alice')

    response = client.get(f"/getUser/{user['user_id']}")

    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['username'] == 'alice'
    assert 'password' not in data


def test_get_user_not_found(client):
    response = client.get('/getUser/missing')

    assert response.status_code == 404
    assert response.get_json() == {"success": False, "error_code": "NOT_FOUND", "error": "User not found"}


def test_register_too_large_returns_413(db, upload_dir):
    app = create_app('testing', db=db, test_config={'UPLOAD_FOLDER': str(upload_dir), 'MAX_CONTENT_LENGTH': 100})

    response = app.test_client().post('/register', data={
        'username': 'alice', 'email': 'alice@example.com', 'password': 'secret',
        'profilePhoto': (io.BytesIO(b'x' * 1000), 'me.png'),
    }, content_type='multipart/form-data')

    assert response.status_code == 413
    assert db.collections.get('users', {}) == {}
