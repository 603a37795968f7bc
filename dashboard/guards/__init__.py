"""Request guards (FastAPI dependencies)."""
