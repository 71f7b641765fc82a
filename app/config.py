"""
==============================================================================
설정 관리 모듈 (config.py)
==============================================================================

이 파일은 서버의 모든 설정을 관리합니다.
설정값들은 환경변수(.env 파일)에서 가져오거나, 기본값을 사용합니다.

설정 우선순위:
    1. 환경변수 (예: export DATABASE_URL="...")  <- 가장 높은 우선순위
    2. .env 파일에 적힌 값
    3. 코드에 적힌 기본값                        <- 가장 낮은 우선순위

예시:
    - 로컬 개발: 기본값(SQLite) 사용
    - 프로덕션: 환경변수로 PostgreSQL 주소와 SECRET_KEY 설정

==============================================================================
"""

from pydantic_settings import BaseSettings  # 설정 관리 라이브러리
from functools import lru_cache  # 캐싱 기능 (설정을 한 번만 읽어옴)


class Settings(BaseSettings):
    """
    애플리케이션 설정 클래스

    이 클래스에 정의된 변수들은 자동으로 환경변수에서 값을 가져옵니다.
    환경변수 이름은 대소문자를 구분하지 않습니다.

    예: database_url -> DATABASE_URL 환경변수에서 값을 가져옴
    """

    # =========================================================================
    # 데이터베이스 설정
    # =========================================================================
    #
    # DATABASE_URL 형식:
    #   - SQLite:     sqlite+aiosqlite:///./파일명.db
    #   - PostgreSQL: postgresql+asyncpg://사용자:비밀번호@호스트:포트/DB이름
    #
    database_url: str = "sqlite+aiosqlite:///./board.db"
    database_echo: bool = False

    # =========================================================================
    # 서버 설정
    # =========================================================================
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = True
    log_level: str = "INFO"

    # =========================================================================
    # CORS 설정 (Cross-Origin Resource Sharing)
    # =========================================================================
    #
    # 쉼표로 구분하여 여러 주소를 허용할 수 있습니다.
    # 쿠키 인증을 쓰므로 "*" 대신 실제 프론트엔드 주소를 적어야 합니다.
    #
    cors_origins: str = "http://localhost:3000"

    # =========================================================================
    # 인증 설정 (JWT)
    # =========================================================================
    #
    # secret_key: 토큰 서명 키. 배포 환경마다 반드시 SECRET_KEY로 바꿔주세요.
    # access_token_expire_minutes: 토큰 유효 시간 (분)
    # auth_cookie_name: 토큰을 담는 쿠키 이름 ("Bearer <token>" 형식)
    #
    secret_key: str = "change-me-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    auth_cookie_name: str = "authorization"

    # 비밀번호 해시 반복 횟수 (PBKDF2-HMAC-SHA256)
    password_hash_iterations: int = 100_000

    class Config:
        """
        Pydantic 설정 클래스

        env_file: 환경변수를 읽어올 파일 경로
        env_file_encoding: 파일 인코딩 (한글 지원을 위해 utf-8 사용)
        """
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache()  # 이 함수의 결과를 캐싱 (매번 파일을 읽지 않고 한 번만 읽음)
def get_settings() -> Settings:
    """
    설정 객체를 가져오는 함수

    @lru_cache() 덕분에 처음 호출될 때만 Settings()를 생성하고,
    이후에는 캐시된 값을 반환합니다.

    Returns:
        Settings: 설정 객체
    """
    return Settings()
