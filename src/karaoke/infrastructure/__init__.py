"""Infrastructure layer - adapters for the database, Redis and logging."""
