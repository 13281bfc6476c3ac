# backend/config.py
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL
from typing import ClassVar, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    # MySQL connection; without DB_HOST the app falls back to a local SQLite file
    DB_HOST: Optional[str] = None
    DB_USER: str = "root"
    DB_PASSWORD: str = ""
    DB_NAME: str = "inventory"
    DB_PORT: int = 3306
    DB_POOL_SIZE: int = 10

    # Full SQLAlchemy URL, takes precedence over the DB_* values
    DATABASE_URL: Optional[str] = None

    PORT: int = 30032
    LOG_LEVEL: str = "INFO"

    # Image store: where uploads are written and the public address they are served from
    UPLOAD_DIR: str = "static/uploads/images"
    PUBLIC_BASE_URL: str = "http://localhost:30032/uploads/images"

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            # SQLAlchemy requires postgresql://, some hosts still hand out postgres://
            if self.DATABASE_URL.startswith("postgres://"):
                return self.DATABASE_URL.replace("postgres://", "postgresql://", 1)
            return self.DATABASE_URL
        if self.DB_HOST:
            url = URL.create(
                "mysql+pymysql",
                username=self.DB_USER,
                password=self.DB_PASSWORD or None,
                host=self.DB_HOST,
                port=self.DB_PORT,
                database=self.DB_NAME,
            )
            return url.render_as_string(hide_password=False)
        return "sqlite:///./inventory.db"

settings = Settings()
