"""Configuration module for the Evolution API client."""

from .settings import EvolutionConfig, Settings

__all__ = ["EvolutionConfig", "Settings"]
