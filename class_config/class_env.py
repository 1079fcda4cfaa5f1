import os
from pathlib import Path
from dotenv import load_dotenv


class Config:
    BASE_DIR = Path(__file__).resolve().parent.parent
    ENV_FILE_PATH = BASE_DIR / '.env'

    def __init__(self):
        # 기본 .env 로드
        load_dotenv(self.ENV_FILE_PATH)

        # 환경별 .env 파일 결정
        app_env = os.getenv('APP_ENV', 'development')
        env_file_name = f".env.{app_env}"
        env_file_path = self.BASE_DIR / env_file_name
        load_dotenv(env_file_path, override=True)

    def _get(self, key: str, default: str = None) -> str:
        return os.getenv(key, default)

    def _get_int(self, key: str, default: int = 0) -> int:
        value = os.getenv(key)
        if not value:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def _get_bool(self, key: str, default: bool = False) -> bool:
        val = os.getenv(key, str(default)).lower()
        return val in ('true', '1', 'yes')

    @property
    def app_env(self):
        return self._get('APP_ENV', 'development')

    @property
    def log_path(self):
        return self._get('LOG_PATH')

    # Dashboard API
    @property
    def api_base_url(self):
        return self._get('API_BASE_URL', 'http://localhost:3001/api')

    @property
    def api_timeout_ms(self):
        return self._get_int('API_TIMEOUT', 10000)

    @property
    def api_retry_attempts(self):
        return self._get_int('API_RETRY_ATTEMPTS', 3)

    @property
    def api_retry_delay_ms(self):
        return self._get_int('API_RETRY_DELAY', 1000)

    @property
    def api_debug(self):
        return self._get_bool('API_DEBUG', False)

    @property
    def login_path(self):
        return self._get('API_LOGIN_PATH', '/login')

    def validate(self):
        """API 설정값 검증"""
        if not self.api_base_url:
            raise ValueError("API_BASE_URL is required")
        if self.api_timeout_ms <= 0:
            raise ValueError("API_TIMEOUT must be greater than 0")
        if self.api_retry_attempts < 0:
            raise ValueError("API_RETRY_ATTEMPTS must be 0 or greater")
        if self.api_retry_delay_ms < 0:
            raise ValueError("API_RETRY_DELAY must be 0 or greater")
