"""Where's My Package web front end (FastAPI)."""
