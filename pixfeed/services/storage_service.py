# pixfeed/services/storage_service.py
import os
import logging
from typing import Optional
from flask import Flask
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from pixfeed.utils.datetime_utils import DateTimeUtils

class StorageService:
    """
    업로드 파일을 로컬 디스크에 저장하는 범용 서비스 클래스입니다.
    문서에는 항상 업로드 디렉터리 기준 파일명만 저장하고,
    공개 URL은 응답을 만들 때 url_for()로 계산합니다.
    """

    URL_PREFIX = '/uploads'
    MAX_NAME_ATTEMPTS = 100

    def __init__(self):
        """실제 저장 경로는 init_app 메서드를 통해 주입됩니다."""
        self.upload_folder = None

    def init_app(self, app: Flask):
        """
        Flask 앱 초기화 과정에서 호출되어 업로드 디렉터리를 설정합니다.

        :param app: Flask 애플리케이션 객체
        """
        folder = app.config.get('UPLOAD_FOLDER')
        if not folder:
            raise ValueError("UPLOAD_FOLDER 설정이 .env 또는 설정 파일에 필요합니다.")

        # 상대 경로는 실행 위치 기준으로 해석합니다.
        self.upload_folder = os.path.abspath(folder)
        os.makedirs(self.upload_folder, exist_ok=True)
        logging.info(f"StorageService: 업로드 디렉터리 준비 완료 ({self.upload_folder})")

    def _require_init(self):
        if not self.upload_folder:
            raise RuntimeError("StorageService가 초기화되지 않았습니다. init_app을 먼저 호출해주세요.")

    def build_filename(self, field_name: str, original_filename: str, suffix: str = '') -> str:
        """
        '<필드명>-<밀리초 타임스탬프>.<확장자>' 형식의 저장 파일명을 만듭니다.

        :param field_name: 업로드 폼 필드명 (예: "profilePhoto", "image")
        :param original_filename: 클라이언트가 보낸 원본 파일명 (확장자 파악에 사용)
        :param suffix: 같은 이름의 파일이 이미 있을 때 타임스탬프 뒤에 붙이는 값 (예: "-1")
        """
        basename = (original_filename or '').replace('\\', '/').rsplit('/', 1)[-1]
        # 확장자를 먼저 분리한 뒤 정리합니다. ('.png'처럼 이름 없이 확장자만 있는 경우 포함)
        extension = secure_filename(basename.rsplit('.', 1)[-1]).lower() if '.' in basename else ''
        extension = f".{extension}" if extension else ''
        return f"{field_name}-{DateTimeUtils.timestamp_ms()}{suffix}{extension}"

    def save(self, file: Optional[FileStorage], field_name: str) -> Optional[str]:
        """
        업로드된 파일을 저장하고 저장된 파일명을 반환합니다.
        파일이 없거나 비어 있으면 None을 반환합니다.

        같은 밀리초에 같은 필드로 올라온 파일끼리 덮어쓰지 않도록 배타적으로 생성하고,
        이름이 겹치면 '-1', '-2' ... 접미사를 붙입니다.
        """
        self._require_init()
        if file is None or not file.filename:
            return None

        for attempt in range(self.MAX_NAME_ATTEMPTS):
            filename = self.build_filename(field_name, file.filename, f"-{attempt}" if attempt else '')
            try:
                with open(os.path.join(self.upload_folder, filename), 'xb') as destination:
                    file.save(destination)
            except FileExistsError:
                continue
            logging.info(f"업로드 파일 저장 완료: {filename}")
            return filename

        raise FileExistsError(f"업로드 파일 이름을 만들 수 없습니다: {field_name}")

    def delete(self, filename: Optional[str]) -> bool:
        """
        저장된 파일을 삭제합니다. 파일이 이미 없으면 경고만 남기고 False를 반환합니다.
        """
        self._require_init()
        if not filename:
            return False

        path = os.path.join(self.upload_folder, os.path.basename(filename))
        try:
            os.remove(path)
            logging.info(f"업로드 파일 삭제 완료: {filename}")
            return True
        except FileNotFoundError:
            logging.warning(f"삭제할 업로드 파일이 없습니다: {filename}")
            return False

    def url_for(self, filename: Optional[str]) -> Optional[str]:
        """저장된 파일명을 공개 경로(/uploads/<파일명>)로 변환합니다."""
        if not filename:
            return None
        return f"{self.URL_PREFIX}/{filename}"
