from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""
    
    # Database
    DATABASE_URL: str = "sqlite:///./designhub.db"
    
    # API
    API_TITLE: str = "DesignHub API"
    API_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    
    # Security
    SECRET_KEY: str = "change-me"
    
    # Uploads
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_SIZE: int = 5 * 1024 * 1024
    PUBLIC_BASE_URL: str = "http://localhost:8000"
    
    # Client toolkit
    API_BASE_URL: str = "http://localhost:8000/api/v1"
    TOAST_DURATION_SECONDS: float = 5.0
    
    class Config:
        env_file = ".env"
        case_sensitive = True

# Create settings instance
settings = Settings()
