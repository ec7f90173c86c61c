"""Konfigurationsmanager: Laden, Speichern und Auflösen der Pfade.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
import logging
import os
from datetime import date
from pathlib import Path
from typing import Optional

from rich.console import Console
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.defaults import default_app_config
from config.schema import AppConfig

logger = logging.getLogger(__name__)

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120

# Überschreibt storage.data_dir (z.B. für Tests oder mehrere Installationen)
DATA_DIR_ENV = "TEXNIKUM_DATA_DIR"


# ─── YAML-KOMMENTAR-AUFBAU ───

_YAML_HEADER = f"""\
# ============================================
# Texnikum ERP — Konfiguration
# Erstellt: {date.today().isoformat()}
# ============================================
"""

_SECTION_COMMENTS = {
    "storage": (
        "Speicher",
        "Eine JSON-Datei pro Sammlung (teachers, students, schedule-lessons, ...).",
    ),
    "auth": (
        "Anmeldung",
        None,
    ),
    "logging": (
        "Logging",
        "Level: DEBUG, INFO, WARNING, ERROR.",
    ),
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "app_config.yaml"

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else self.DEFAULT_CONFIG

    def first_run_check(self) -> bool:
        """Gibt True zurück wenn noch keine Config existiert."""
        return not self.path.exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> AppConfig:
        """Lade Config aus YAML. Fehlt die Datei, gelten die Defaults."""
        target = Path(path) if path is not None else self.path
        if not target.exists():
            logger.debug(f"Keine Konfigurationsdatei unter {target}, nutze Defaults")
            return default_app_config()
        with open(target, "r", encoding="utf-8") as f:
            raw = yaml.load(f)
        try:
            return AppConfig.model_validate(dict(raw or {}))
        except Exception as e:
            raise ValueError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e

    # ─── Speichern ───

    def save(self, config: AppConfig, path: Optional[Path] = None) -> Path:
        """Speichere Config als YAML mit Abschnitts-Kommentaren."""
        target = Path(path) if path is not None else self.path
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(data, f)

        console.print(f"[green]✓[/green] Konfiguration gespeichert: {target}")
        return target

    def _build_commented_yaml(self, config: AppConfig) -> CommentedMap:
        """Baut die YAML-Struktur mit Kommentaren auf."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )
        return cm

    # ─── Pfade ───

    @staticmethod
    def resolve_data_dir(config: AppConfig) -> Path:
        """Datenverzeichnis; die Umgebungsvariable hat Vorrang vor der Config."""
        override = os.environ.get(DATA_DIR_ENV, "").strip()
        return Path(override) if override else Path(config.storage.data_dir)
