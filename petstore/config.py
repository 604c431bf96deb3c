from pydantic import BaseModel
import os
from pathlib import Path
from dotenv import load_dotenv
load_dotenv()  # carga el archivo .env de la raíz

class Settings(BaseModel):
    app_name: str = os.getenv("APP_NAME", "PetStore")
    env: str = os.getenv("APP_ENV", "dev")
    database_url: str = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + str(Path(__file__).resolve().parents[1] / "shelter.db"),
    )
    content_authority: str = os.getenv("CONTENT_AUTHORITY", "com.example.android.pets")
    write_rate_limit: str = os.getenv("WRITE_RATE_LIMIT", "30/minute")
    frontend_base_url: str = os.getenv("FRONTEND_BASE_URL", "http://localhost:5173")


_settings: Settings | None = None
def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
