"""Runtime services (logging, spans) shared across the editor."""
