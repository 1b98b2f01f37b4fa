from pydantic import BaseModel
import os
from dotenv import load_dotenv
load_dotenv()  # loads the .env file at the project root


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    app_name: str = os.getenv("APP_NAME", "PetClinic REST")
    env: str = os.getenv("APP_ENV", "dev")
    mongodb_uri: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    db_name: str = os.getenv("DB_NAME", "petclinic")
    jwt_secret: str = os.getenv("JWT_SECRET", "change-me")
    jwt_expires_hours: int = int(os.getenv("JWT_EXPIRES_HOURS", "8"))
    security_enabled: bool = _flag("PETCLINIC_SECURITY_ENABLE")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    cors_allowed_origins: list[str] = [
        o.strip() for o in os.getenv("CORS_ALLOWED_ORIGINS", "*").split(",") if o.strip()
    ]


_settings: Settings | None = None
def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
