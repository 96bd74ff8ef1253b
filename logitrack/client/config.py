"""
API client configuration.
"""

from pydantic_settings import BaseSettings


class ClientSettings(BaseSettings):
    """
    Client settings loaded from environment variables.

    Attributes:
        API_URL: Base URL of the LogiTrack API
        CLIENT_TIMEOUT_SECONDS: Per-request timeout
    """

    API_URL: str = "http://localhost:5000"
    CLIENT_TIMEOUT_SECONDS: float = 15.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
