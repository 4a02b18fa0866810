from typing import Optional

from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    DATABASE_URL: Optional[str] = None
    STORE: str = "memory"  # "memory" or "db"
    ENV: str = "local"  # Environment setting
    PORT: int = 3000
    LOG_LEVEL: str = "info"
    LOG_FILE: Optional[str] = None

    # Front-end origin allowed by CORS
    CORS_ORIGIN: str = "http://localhost:3001"

    class Config:
        env_file = ".env"

settings = Settings()
