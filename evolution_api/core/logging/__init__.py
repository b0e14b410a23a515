"""Logging module for the Evolution API client."""

from .context import instance_context
from .logger import get_logger, setup_app_logging, setup_logging

__all__ = ["get_logger", "instance_context", "setup_app_logging", "setup_logging"]
