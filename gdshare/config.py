from pathlib import Path
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
from functools import lru_cache


class Settings(BaseSettings):
    """
    Centralized application configuration with type validation.
    Automatically reads variables from the environment and an optional .env file.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- General Settings ---
    LOG_LEVEL: str = "INFO"

    # --- Google Drive Settings ---
    GDRIVE_FOLDER_ID: str
    GDRIVE_CREDENTIALS_FILE: str = "credentials.json"
    GDRIVE_TOKEN_FILE: str = "token.json"
    GDRIVE_SCOPES: List[str] = ["https://www.googleapis.com/auth/drive"]

    # --- Workflow Settings ---
    MAX_AGE_DAYS: int = Field(30, ge=0)
    LIST_PAGE_SIZE: int = Field(10, ge=1, le=1000)
    UPLOAD_DESCRIPTION: str = "Uploaded with gdshare"

    # --- Constants and Computed Paths ---
    BASE_DIR: Path = Field(default_factory=Path.cwd)

    @model_validator(mode="before")
    def clean_and_validate_folder_id(cls, values):
        if not isinstance(values, dict):
            return values

        folder_id = values.get("GDRIVE_FOLDER_ID")
        if folder_id is None:
            # Let BaseSettings report the missing required field.
            return values

        folder_id = str(folder_id).strip()
        if not folder_id:
            raise ValueError("GDRIVE_FOLDER_ID is required and cannot be empty")
        values["GDRIVE_FOLDER_ID"] = folder_id
        return values

    def _resolve(self, path: str) -> Path:
        candidate = Path(path)
        return candidate if candidate.is_absolute() else self.BASE_DIR / candidate

    @property
    def CREDENTIALS_PATH(self) -> Path:
        return self._resolve(self.GDRIVE_CREDENTIALS_FILE)

    @property
    def TOKEN_PATH(self) -> Path:
        return self._resolve(self.GDRIVE_TOKEN_FILE)

    @property
    def LOG_FILE(self) -> Path:
        return self.BASE_DIR / "gdshare.log"


@lru_cache()
def get_settings() -> Settings:
    """
    Returns a cached instance of the application settings.
    The first call to this function will initialize the settings.
    """
    return Settings()
