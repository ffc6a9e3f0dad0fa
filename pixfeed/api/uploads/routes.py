# pixfeed/api/uploads/routes.py

from flask import Blueprint, current_app, send_from_directory

# 업로드된 파일을 정적으로 제공하는 블루프린트입니다.
# 이 블루프린트는 '/uploads' 접두사로 등록됩니다.
uploads_bp = Blueprint('uploads_bp', __name__)


@uploads_bp.route('/<path:filename>', methods=['GET'])
def serve_upload(filename: str):
    """
    저장된 프로필 사진/게시물 이미지를 반환합니다.
    파일이 없으면 send_from_directory가 404(NotFound)를 발생시키고,
    앱 전역 HTTPException 핸들러가 JSON으로 응답합니다.
    """
    storage_service = current_app.services['storage']
    return send_from_directory(storage_service.upload_folder, filename)
