"""Infrastructure adapters (database, outbound HTTP clients)."""
