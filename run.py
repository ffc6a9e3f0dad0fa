# run.py
from dotenv import load_dotenv
import os
basedir = os.path.abspath(os.path.dirname(__file__))
# 실행 파일과 같은 디렉터리의 '.env' 파일을 로드합니다. (앱 임포트 전에)
load_dotenv(dotenv_path=os.path.join(basedir, '.env'))

from pixfeed import create_app

app = create_app()

if __name__ == '__main__':
    host = app.config.get('HOST', '127.0.0.1')
    port = app.config.get('PORT', 3001)
    debug = app.config.get('DEBUG', False)
    app.run(host=host, port=port, debug=debug)
