"""Realmgen - bootstrap a Redocly Realm documentation project with Gemini."""

__version__ = "0.1.0"
