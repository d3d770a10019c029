"""
Configuration de l'application via pydantic-settings.

La configuration est chargee depuis les variables d'environnement avec le
prefixe MEDIAMETA_, et peut optionnellement etre fournie via un fichier .env.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env a la racine du projet (parent de mediameta/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Parametres de l'application avec support des variables d'environnement.

    Tous les parametres peuvent etre surcharges via des variables d'environnement
    avec le prefixe MEDIAMETA_.
    Exemple : MEDIAMETA_OPENLIBRARY_COVER_IMAGE_SIZE=L
    """

    model_config = SettingsConfigDict(
        env_prefix="MEDIAMETA_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Pagination commune a tous les fournisseurs
    page_limit: int = Field(default=20, ge=1)

    # Reseau
    http_timeout: float = Field(default=30.0, gt=0)

    # Open Library
    openlibrary_base_url: str = Field(default="https://openlibrary.org/")
    openlibrary_image_base_url: str = Field(default="https://covers.openlibrary.org")
    openlibrary_cover_image_size: Literal["S", "M", "L"] = Field(default="M")
    openlibrary_isbn_rate_per_second: float = Field(default=1.0, gt=0)
    openlibrary_isbn_max_attempts: int = Field(default=3, ge=1)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de retention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/mediameta.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("openlibrary_cover_image_size", mode="before")
    @classmethod
    def upper_size(cls, v: str) -> str:
        """Accepte s/m/l en minuscules."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Etend ~ vers le repertoire home dans les chemins."""
        return Path(v).expanduser()
