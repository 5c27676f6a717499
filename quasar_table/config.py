"""Quasar Table Application Configuration."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Flask
    SECRET_KEY: str = "dev-secret-key-change-in-production"
    DEBUG: bool = True
    
    # Database
    DATABASE_URL: str = "sqlite:///quasar_table.db"
    
    # Data table paginator
    PAGINATOR_DEFAULT_PER_PAGE: int = 15
    PAGINATOR_MAX_PER_PAGE: int = 100
    PAGINATOR_SESSION_SUFFIX: str = "_datatable"
    
    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Allow extra env vars like FLASK_APP without error


settings = Settings()


class FlaskConfig:
    """Flask configuration class."""
    
    SECRET_KEY = settings.SECRET_KEY
    
    # SQLAlchemy
    SQLALCHEMY_DATABASE_URI = settings.DATABASE_URL
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
    }
    
    # Paginator
    PAGINATOR_DEFAULT_PER_PAGE = settings.PAGINATOR_DEFAULT_PER_PAGE
    PAGINATOR_MAX_PER_PAGE = settings.PAGINATOR_MAX_PER_PAGE
    PAGINATOR_SESSION_SUFFIX = settings.PAGINATOR_SESSION_SUFFIX
