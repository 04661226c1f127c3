"""
Application Configuration Settings
"""

from pydantic_settings import BaseSettings
from typing import List

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "Expense Management System"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Database (stored procedures live on SQL Server)
    DATABASE_URL: str = (
        "mssql+pyodbc://localhost/ExpenseManagement"
        "?driver=ODBC+Driver+18+for+SQL+Server&TrustServerCertificate=yes"
    )
    DATABASE_ECHO: bool = False

    # Money
    DEFAULT_CURRENCY: str = "GBP"

    # Google Gemini AI (chat assistant)
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = DEFAULT_GEMINI_MODEL
    CHAT_MAX_OUTPUT_TOKENS: int = 1500
    CHAT_TEMPERATURE: float = 0.7

    @property
    def chat_configured(self) -> bool:
        """Chat needs both an API key and a model name"""
        return bool(self.GEMINI_API_KEY.strip() and self.GEMINI_MODEL.strip())

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:8000"  # Comma-separated string

    @property
    def cors_origins_list(self) -> List[str]:
        """Convert comma-separated string to list"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/app.log"

    class Config:
        env_file = ".env"
        case_sensitive = True


# Create settings instance
settings = Settings()
