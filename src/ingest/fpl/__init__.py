"""FPL league standings and history ingest."""
