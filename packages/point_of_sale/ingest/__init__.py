"""Catalog ingestion helpers (JSON seed files → in-memory or SQL catalog)."""
