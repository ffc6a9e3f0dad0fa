# pixfeed/core/security.py
import bcrypt
from flask import current_app, has_app_context

DEFAULT_ROUNDS = 10

def hash_password(password: str) -> str:
    rounds = current_app.config.get('BCRYPT_ROUNDS', DEFAULT_ROUNDS) if has_app_context() else DEFAULT_ROUNDS
    hashed = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt(rounds=rounds))
    return hashed.decode('utf-8')

def verify_password(password: str, hashed_password: str) -> bool:
    """평문 비밀번호가 저장된 해시와 일치하는지 확인합니다. 해시 형식이 잘못된 경우 False."""
    if not password or not hashed_password:
        return False
    try:
        return bcrypt.checkpw(password.encode('utf-8'), hashed_password.encode('utf-8'))
    except ValueError:
        return False
