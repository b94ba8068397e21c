from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "Places API"
    PROJECT_DESCRIPTION: str = "Places with photo attachments"
    VERSION: str = "2022-01-01"

    # "development" creates the schema on startup and redirects / to the docs
    ENVIRONMENT: str = "development"

    # Database Settings
    DATABASE_URL: str = "sqlite:///./places.db"

    # Object Storage Settings
    STORAGE_CONTAINER: str = "uploads"
    AWS_REGION: str = "us-east-1"
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    # Set for MinIO / LocalStack and other S3-compatible stores
    STORAGE_ENDPOINT_URL: Optional[str] = None
    # Public prefix for uploaded objects, e.g. a CDN in front of the bucket
    STORAGE_PUBLIC_BASE_URL: Optional[str] = None

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"


settings = Settings()
