# pixfeed/api/posts/schemas.py
from flask import current_app
from marshmallow import Schema, fields, validate, EXCLUDE

from pixfeed.api.users.schemas import AuthorSchema
from pixfeed.api.comments.schemas import CommentSchema, CommentResponseSchema

# --- API 요청 스키마 ---

class PostCreateSchema(Schema):
    """POST /CreatePost (multipart/form-data) 폼 필드. 이미지는 request.files['image']로 받습니다."""
    class Meta:
        unknown = EXCLUDE

    title = fields.Str(required=True, validate=validate.Length(min=1))
    description = fields.Str(required=True, validate=validate.Length(min=1))
    user_id = fields.Str(required=True, validate=validate.Length(min=1))

class LikeToggleSchema(Schema):
    """POST /posts/{post_id}/like 요청 본문."""
    class Meta:
        unknown = EXCLUDE

    user_id = fields.Str(required=True, data_key='userId', validate=validate.Length(min=1),
                         error_messages={"required": "userId는 필수 항목입니다."})

# --- API 응답 스키마 ---

class PostResponseSchema(Schema):
    """Firestore에 저장된 그대로의 게시물 문서 (user는 user_id 문자열)."""
    post_id = fields.Str(required=True)
    title = fields.Str(required=True)
    description = fields.Str(required=True)
    image = fields.Str(allow_none=True)
    image_url = fields.Function(lambda obj: current_app.services['storage'].url_for(obj.get('image')))
    user = fields.Str(required=True)
    likes = fields.List(fields.Str(), dump_default=list)
    comments = fields.List(fields.Nested(CommentSchema), dump_default=list)
    created_at = fields.DateTime(required=True)

class PopulatedPostResponseSchema(PostResponseSchema):
    """작성자와 댓글 작성자 정보가 확장된 게시물 응답 스키마 (GET /getPosts)."""
    user = fields.Nested(AuthorSchema, required=True)
    comments = fields.List(fields.Nested(CommentResponseSchema), dump_default=list)
