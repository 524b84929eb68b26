# docuvoice/config.py
from typing import List, Literal, Optional
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./docuvoice.db"  # Default if not in .env
    ENVIRONMENT: Literal["development", "production"] = "development"

    # Storage Paths
    STORAGE_PATH: Path = Path("storage")
    LOGS_PATH: Path | None = None  # Will be set based on STORAGE_PATH
    LOG_LEVEL: str = "INFO"

    # Google Generative AI
    GOOGLE_AI_API_KEY: Optional[str] = None
    GEMINI_API_BASE: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_CHAT_MODEL: str = "gemini-1.5-flash"
    GEMINI_QUESTIONS_MODEL: str = "gemini-2.0-flash"
    AI_TIMEOUT_SECONDS: float = 60.0

    # Clerk
    CLERK_JWKS_URL: Optional[str] = None
    CLERK_JWT_KEY: Optional[str] = None  # PEM public key for networkless verification
    CLERK_ISSUER: Optional[str] = None
    CLERK_AUTHORIZED_PARTIES: str = ""

    # HTTP
    ALLOWED_ORIGINS: str = "*"

    # Limits
    DEFAULT_DOCUMENT_LIMIT: int = 10
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024
    MAX_SPEECH_CHARS: int = 4000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    def model_post_init(self, __context) -> None:
        """Post initialization hook to set derived paths"""
        if isinstance(self.STORAGE_PATH, str):
            self.STORAGE_PATH = Path(self.STORAGE_PATH)

        self.LOGS_PATH = Path(self.LOGS_PATH) if self.LOGS_PATH else self.STORAGE_PATH / "logs"

        self.create_storage_dirs()

    def create_storage_dirs(self) -> None:
        """Create necessary storage directories if they don't exist"""
        for path in [self.STORAGE_PATH, self.LOGS_PATH]:
            path.mkdir(parents=True, exist_ok=True)

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    @property
    def authorized_parties(self) -> List[str]:
        return [party.strip() for party in self.CLERK_AUTHORIZED_PARTIES.split(",") if party.strip()]

settings = Settings()
