"""Validation package."""

from famzoo_commands.validation.validator import CommandValidator

__all__ = ["CommandValidator"]
