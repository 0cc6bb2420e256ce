"""Masking core: parser, slot buffer, engine, filters and cache."""
