# pixfeed/api/users/schemas.py
from flask import current_app
from marshmallow import Schema, fields, validate, EXCLUDE

_required = {"required": "필수 항목입니다."}


def _photo_url(obj):
    return current_app.services['storage'].url_for(obj.get('profile_photo'))


class RegisterSchema(Schema):
    """
    POST /register (multipart/form-data)
    회원가입 폼 필드의 존재 여부만 검사합니다. 파일(profilePhoto)은 request.files에서 따로 받습니다.
    """
    class Meta:
        unknown = EXCLUDE

    username = fields.Str(required=True, validate=validate.Length(min=1), error_messages=_required)
    email = fields.Str(required=True, validate=validate.Length(min=1), error_messages=_required)
    password = fields.Str(required=True, validate=validate.Length(min=1), error_messages=_required, load_only=True)


class LoginSchema(Schema):
    """POST /login 요청 본문 스키마"""
    class Meta:
        unknown = EXCLUDE

    username = fields.Str(required=True, validate=validate.Length(min=1), error_messages=_required)
    password = fields.Str(required=True, validate=validate.Length(min=1), error_messages=_required, load_only=True)


class UserResponseSchema(Schema):
    """
    사용자 정보 응답 스키마.
    비밀번호 해시(password)는 정의하지 않으므로 어떤 응답에도 포함되지 않습니다.
    """
    user_id = fields.Str(required=True)
    username = fields.Str(required=True)
    email = fields.Str(required=True)
    profile_photo = fields.Str(allow_none=True)
    profile_photo_url = fields.Function(_photo_url)
    created_at = fields.DateTime()


class AuthorSchema(Schema):
    """게시물/댓글 응답에 확장되어 들어가는 작성자 공개 정보 스키마."""
    user_id = fields.Str(required=True)
    username = fields.Str(allow_none=True)
    profile_photo = fields.Str(allow_none=True)
    profile_photo_url = fields.Function(_photo_url)
