"""Fachlogik über dem Speicher-Port (Lehrkräfte, Studierende, Stundenplan, ...)."""
