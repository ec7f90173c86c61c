"""Kurze, eindeutige Login-Namen aus Vor-, Nach- und Vatersnamen.

Die Normalisierung ist verlustbehaftet: alles außerhalb a-z
(Umlaute, Apostrophe, kyrillische Buchstaben, Ziffern) entfällt, es wird
nicht transliteriert.
"""

import re
from collections.abc import Iterable, Mapping
from typing import Optional, Union

MAX_LEN = 8
FALLBACK_BASE = "user"

_NON_LATIN = re.compile(r"[^a-z]")


def normalize_name_part(value: Optional[str]) -> str:
    """'  Ro'ziyev ' → 'roziyev'."""
    if not value:
        return ""
    return _NON_LATIN.sub("", value.lower())


def username_base(first_name: str, last_name: str,
                  middle_name: Optional[str] = None) -> str:
    """Basis ohne Kollisionsauflösung (höchstens MAX_LEN Zeichen)."""
    first = normalize_name_part(first_name)
    last = normalize_name_part(last_name)
    middle = normalize_name_part(middle_name)

    base = ""
    if first:
        base = first
        if len(base) > MAX_LEN:
            # Zu lang → Initialen (Vorname, Vatersname, Nachname)
            base = first[0] + (middle[:1]) + (last[:1])
            base = base or first[:2]

    if not base:
        base = FALLBACK_BASE
    return base[:MAX_LEN]


def _taken(existing: Union[Mapping[str, str], Iterable[str]],
           exclude_id: Optional[str]) -> set[str]:
    if isinstance(existing, Mapping):
        return {
            str(name).lower()
            for record_id, name in existing.items()
            if record_id != exclude_id and name
        }
    return {str(name).lower() for name in existing if name}


def generate_username(
    first_name: str,
    last_name: str,
    middle_name: Optional[str] = None,
    existing: Union[Mapping[str, str], Iterable[str]] = (),
    exclude_id: Optional[str] = None,
) -> str:
    """Erzeugt einen Username, der (case-insensitiv) noch nicht vergeben ist.

    existing: entweder {record_id: username} oder eine Menge von Usernames.
    exclude_id: nur bei einem Mapping wirksam; der Eintrag dieser ID zählt
    nicht als Kollision (Neuberechnung beim Bearbeiten).

    Bei Kollision wird ein Zähler angehängt und die Basis so weit gekürzt,
    dass das Ergebnis nie länger als MAX_LEN wird: user, user1, user2, ...
    """
    base = username_base(first_name, last_name, middle_name)
    taken = _taken(existing, exclude_id)

    candidate = base
    counter = 1
    while candidate.lower() in taken:
        suffix = str(counter)
        trimmed = base[: max(1, MAX_LEN - len(suffix))]
        candidate = f"{trimmed}{suffix}"[:MAX_LEN]
        counter += 1
    return candidate
