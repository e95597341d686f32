"""Nutritionist recommendation engine for the lunch ordering app."""

__version__ = "0.1.0"
