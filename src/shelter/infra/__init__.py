"""Shelter infrastructure adapters: HTTP, persistence, observability."""
