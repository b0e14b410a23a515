"""Evolution API client package."""

from .evolution_client import EvolutionClient
from .transport import HttpTransport, RequestDescriptor, build_path

__all__ = ["EvolutionClient", "HttpTransport", "RequestDescriptor", "build_path"]
