"""Database Layer — declarative base for the ORM models."""
