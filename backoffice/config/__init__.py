"""Configuration module for the back-office API."""
from .settings import AppConfig, load_settings

__all__ = ["AppConfig", "load_settings"]
