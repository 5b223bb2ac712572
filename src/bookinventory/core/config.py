"""
Configuration module for the book inventory service.

This module defines the Settings class, which loads environment variables
and provides application-wide configuration: database URL and timeout,
credential signing key and lifetime, the optional ISBN lookup service and
the origins allowed to call the API from a browser.

Usage:
    Import the `settings` object to access configuration throughout the project.
"""

import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from typing import List

load_dotenv()

class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        DATABASE_URL (str): SQLAlchemy connection string.
        DB_TIMEOUT_SECONDS (float): Maximum wait for a store connection or lock.
        SECRET_KEY (str): Key used to sign bearer credentials.
        TOKEN_EXPIRE_HOURS (int): Lifetime of an issued credential.
        GEMINI_API_KEY (str): API key for the ISBN lookup service.
        GEMINI_API_URL (str): Endpoint of the ISBN lookup service.
        LOOKUP_TIMEOUT_SECONDS (float): Maximum wait for the ISBN lookup service.
        CORS_ORIGINS (str): Comma-separated list of allowed browser origins.
        ENVIRONMENT (str): Current environment (e.g., 'production', 'development').
        LOG_LEVEL (str): Root logging level.
    """
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./book_inventory.db")
    DB_TIMEOUT_SECONDS: float = float(os.getenv("DB_TIMEOUT_SECONDS", "10"))
    SECRET_KEY: str = os.getenv("SECRET_KEY", "change-me")
    TOKEN_EXPIRE_HOURS: int = int(os.getenv("TOKEN_EXPIRE_HOURS", "24"))
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "NO_GEMINI_KEY_SET")
    GEMINI_API_URL: str = os.getenv(
        "GEMINI_API_URL",
        "https://generativelanguage.googleapis.com/v1beta/models/gemini-pro:generateContent",
    )
    LOOKUP_TIMEOUT_SECONDS: float = float(os.getenv("LOOKUP_TIMEOUT_SECONDS", "15"))
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "production")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def list_cors_origins(self) -> List[str]:
        """
        Returns the list of origins parsed from CORS_ORIGINS.

        Returns:
            List[str]: Allowed origins.
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(',') if origin.strip()]

    @property
    def lookup_enabled(self) -> bool:
        return self.GEMINI_API_KEY != "NO_GEMINI_KEY_SET"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
