"""CSV-Ein- und Ausgabe."""
