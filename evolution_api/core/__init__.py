"""Core configuration, errors and logging for the Evolution API client."""
