"""Fehlerklassen der Service-Schicht.

Ungültige Eingaben und unbekannte IDs werden über Rückgabewerte gemeldet
(None, Rejected, übersprungene Zeilen). Exceptions gibt es nur für
Anmeldung und Rollenprüfung.
"""


class AuthError(Exception):
    """Anmeldung fehlgeschlagen (falsches Passwort, unbekannter Username)."""


class PermissionDenied(Exception):
    """Aktuelle Rolle darf die Aktion nicht ausführen."""
