"""
Collector Configuration

Credentials and factory for the vendor API clients.

Credentials come from explicit arguments or, when built with
``CollectorConfig.from_settings``, from Settings. The clients themselves
never look at the environment.
"""

import logging
from typing import Optional

from src.utils.config import Settings

from .ahrefs import AhrefsClient
from .gsc import SearchConsoleClient
from .semrush import SemrushClient

logger = logging.getLogger(__name__)


class CollectorConfig:
    """Credentials and options for vendor APIs."""

    def __init__(
        self,
        semrush_api_key: Optional[str] = None,
        ahrefs_api_key: Optional[str] = None,
        google_access_token: Optional[str] = None,
        timeout: float = 60.0,
    ):
        """
        Initialize collector configuration.

        Args:
            semrush_api_key: SEMrush API key
            ahrefs_api_key: Ahrefs API key
            google_access_token: OAuth access token for Search Console
            timeout: Request timeout in seconds
        """
        self.semrush_api_key = semrush_api_key
        self.ahrefs_api_key = ahrefs_api_key
        self.google_access_token = google_access_token
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "CollectorConfig":
        return cls(
            semrush_api_key=settings.SEMRUSH_API_KEY,
            ahrefs_api_key=settings.AHREFS_API_KEY,
            google_access_token=settings.GOOGLE_ACCESS_TOKEN,
            timeout=float(settings.API_TIMEOUT),
        )

    @property
    def has_semrush(self) -> bool:
        return bool(self.semrush_api_key)

    @property
    def has_ahrefs(self) -> bool:
        return bool(self.ahrefs_api_key)

    @property
    def has_gsc(self) -> bool:
        return bool(self.google_access_token)

    def log_status(self):
        """Log configuration status."""
        logger.info(
            f"Collector status: "
            f"SEMrush={'enabled' if self.has_semrush else 'disabled'}, "
            f"Ahrefs={'enabled' if self.has_ahrefs else 'disabled'}, "
            f"Search Console={'enabled' if self.has_gsc else 'disabled'}"
        )


class CollectorClients:
    """
    Factory and manager for vendor API clients.

    Usage:
        config = CollectorConfig(semrush_api_key="...")
        async with CollectorClients(config) as clients:
            if clients.semrush:
                keywords = await clients.semrush.research_keywords("crm")
    """

    def __init__(self, config: CollectorConfig):
        self.config = config
        self._semrush: Optional[SemrushClient] = None
        self._ahrefs: Optional[AhrefsClient] = None
        self._gsc: Optional[SearchConsoleClient] = None

    @property
    def semrush(self) -> Optional[SemrushClient]:
        """Get or create SEMrush client."""
        if not self.config.has_semrush:
            return None

        if self._semrush is None:
            self._semrush = SemrushClient(
                api_key=self.config.semrush_api_key,
                timeout=self.config.timeout,
            )
            logger.info("Initialized SEMrush client")

        return self._semrush

    @property
    def ahrefs(self) -> Optional[AhrefsClient]:
        """Get or create Ahrefs client."""
        if not self.config.has_ahrefs:
            return None

        if self._ahrefs is None:
            self._ahrefs = AhrefsClient(
                api_key=self.config.ahrefs_api_key,
                timeout=self.config.timeout,
            )
            logger.info("Initialized Ahrefs client")

        return self._ahrefs

    @property
    def gsc(self) -> Optional[SearchConsoleClient]:
        """Get or create Search Console client."""
        if not self.config.has_gsc:
            return None

        if self._gsc is None:
            self._gsc = SearchConsoleClient(
                access_token=self.config.google_access_token,
                timeout=self.config.timeout,
            )
            logger.info("Initialized Search Console client")

        return self._gsc

    async def close(self):
        """Close all clients."""
        for name in ("_semrush", "_ahrefs", "_gsc"):
            client = getattr(self, name)
            if client:
                await client.close()
                setattr(self, name, None)

        logger.info("Closed collector clients")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
