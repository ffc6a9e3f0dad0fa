# pixfeed/api/comments/schemas.py
from marshmallow import Schema, fields, validate, EXCLUDE
from pixfeed.api.users.schemas import AuthorSchema # 작성자 정보는 사용자 스키마의 것을 재사용

class CommentCreateSchema(Schema):
    """
    POST /comment/{post_id}
    댓글 생성 요청 본문. userId와 비어 있지 않은 text가 모두 필요합니다.
    """
    class Meta:
        unknown = EXCLUDE

    user_id = fields.Str(required=True, data_key='userId', validate=validate.Length(min=1),
                         error_messages={"required": "userId는 필수 항목입니다."})
    text = fields.Str(required=True, validate=validate.Length(min=1, error="댓글 내용이 비어 있습니다."),
                      error_messages={"required": "text는 필수 항목입니다."})

class CommentSchema(Schema):
    """게시물 문서에 저장된 그대로의 댓글 (user는 user_id 문자열)."""
    comment_id = fields.Str(required=True)
    user = fields.Str(required=True)
    text = fields.Str(required=True)
    created_at = fields.DateTime(required=True)

class CommentResponseSchema(CommentSchema):
    """작성자 정보가 확장된 댓글 응답 스키마."""
    user = fields.Nested(AuthorSchema, required=True)
