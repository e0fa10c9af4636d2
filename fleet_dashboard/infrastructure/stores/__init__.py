"""Record store adapters (HTTP API and SQL analytics tables)."""
