"""Presentation layer: dependency wiring."""

from .container import DIContainer, create_container, validate_container

__all__ = [
    "DIContainer",
    "create_container",
    "validate_container",
]
