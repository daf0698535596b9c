"""FastAPI dependencies shared across routers."""
