"""CSV lesen und schreiben (Komma-getrennt, Anführungszeichen nach Bedarf)."""

import csv
import io
from pathlib import Path

_NEEDS_QUOTES = (",", '"', "\n", "\r")


def _escape(value: str) -> str:
    if any(ch in value for ch in _NEEDS_QUOTES):
        return '"' + value.replace('"', '""') + '"'
    return value


def to_csv(rows: list[list[str]]) -> str:
    """Felder mit Komma, Anführungszeichen oder Zeilenumbruch werden gequotet."""
    return "\n".join(",".join(_escape(str(cell)) for cell in row) for row in rows)


def parse_csv(text: str) -> list[list[str]]:
    """Umkehrung von to_csv: \\r\\n und \\n, mehrzeilige Felder in Quotes, Leerzeilen entfallen."""
    reader = csv.reader(io.StringIO(text, newline=""))
    return [row for row in reader if row]


def read_csv_file(path: Path) -> list[list[str]]:
    """Liest eine CSV-Datei; ein UTF-8-BOM (Excel-Export) wird ignoriert."""
    with open(path, encoding="utf-8-sig", newline="") as f:
        return parse_csv(f.read())


def write_csv_file(path: Path, rows: list[list[str]]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_csv(rows), encoding="utf-8")
    return path
