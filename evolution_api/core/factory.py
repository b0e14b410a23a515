"""
Client factory with explicit configuration and reset.

Replaces process-wide mutable configuration: the application owns a factory,
passes it where a client is needed, and tests build their own factory (or call
``reset``) for isolation.
"""

import httpx

from evolution_api.client.evolution_client import EvolutionClient
from evolution_api.core.config.settings import EvolutionConfig, Settings
from evolution_api.core.logging.logger import get_logger


class ClientFactory:
    """
    Builds and caches one ``EvolutionClient`` for a configuration.

    Example:
        factory = ClientFactory.from_env()
        factory.client.list_instances()

        factory.configure(timeout=5)   # next .client uses the new settings
    """

    def __init__(
        self,
        config: EvolutionConfig | None = None,
        http_client: httpx.Client | None = None,
    ):
        self._initial_config = config or EvolutionConfig()
        self._config = self._initial_config
        self._http_client = http_client
        self._client: EvolutionClient | None = None
        self.logger = get_logger(__name__)

    @classmethod
    def from_env(cls, env_file: str | None = ".env") -> "ClientFactory":
        """Create a factory configured from environment variables."""
        return cls(Settings(env_file=env_file).to_config())

    @property
    def config(self) -> EvolutionConfig:
        return self._config

    @property
    def client(self) -> EvolutionClient:
        """The cached client, built on first access."""
        if self._client is None:
            self._client = EvolutionClient(self._config, http_client=self._http_client)
            self.logger.debug(f"Created client for {self._config.base_url}")
        return self._client

    def configure(self, **changes) -> EvolutionConfig:
        """Apply configuration changes; the next ``client`` access rebuilds it.

        Raises:
            pydantic.ValidationError: If a value is invalid (e.g. timeout <= 0)
        """
        self._config = self._config.with_overrides(**changes)
        self._drop_client()
        return self._config

    def reset(self) -> None:
        """Close the cached client and restore the initial configuration."""
        self._config = self._initial_config
        self._drop_client()

    def _drop_client(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
