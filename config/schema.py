from pydantic import BaseModel, Field, field_validator
from typing import Optional


# ─── SPEICHER ───

class StorageConfig(BaseModel):
    """Ablage der Sammlungen (eine JSON-Datei pro Schlüssel)."""
    # Verzeichnis für die JSON-Dateien, relativ zum Arbeitsverzeichnis
    data_dir: str = Field("data_store",
        description="Verzeichnis der JSON-Sammlungen")

    @field_validator("data_dir")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("data_dir darf nicht leer sein.")
        return v.strip()


# ─── ANMELDUNG ───

class AuthConfig(BaseModel):
    """Zugangsdaten und Passwort-Regeln."""
    # Passwort für die Admin-Rolle
    admin_password: str = Field("texnikum-admin-2025",
        description="Admin-Passwort")
    # Länge generierter Lehrer-Passwörter
    password_length: int = Field(10, ge=6, le=64,
        description="Länge generierter Passwörter")
    # Alphabet ohne verwechselbare Zeichen (kein I, l, O, 0, 1)
    password_alphabet: str = Field(
        "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnpqrstuvwxyz23456789",
        min_length=8,
        description="Zeichenvorrat für Passwörter")


# ─── LOGGING ───

class LoggingConfig(BaseModel):
    """Log-Ausgabe über RichHandler."""
    level: str = Field("WARNING", description="Log-Level (DEBUG, INFO, ...)")
    # Optional zusätzlich in Datei schreiben
    file: Optional[str] = None

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v = v.upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unbekanntes Log-Level: {v}")
        return v


# ─── GESAMT-CONFIG ───

class AppConfig(BaseModel):
    """Gesamtkonfiguration des Texnikum-ERP."""
    college_name: str = "Texnikum"
    storage: StorageConfig = StorageConfig()
    auth: AuthConfig = AuthConfig()
    logging: LoggingConfig = LoggingConfig()
