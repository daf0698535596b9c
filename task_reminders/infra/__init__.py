"""Infrastructure adapters: database engine, email delivery, logging."""
