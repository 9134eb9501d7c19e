"""Tresor: authenticated (path, key) -> value records with a tag-addressed read cache."""
