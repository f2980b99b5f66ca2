"""Adapters: the in-memory event bus."""
