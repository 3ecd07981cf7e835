"""Centralized exceptions for the Realmgen application."""


class RealmgenError(Exception):
    """Base exception for all Realmgen errors."""
