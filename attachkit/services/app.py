"""
Attachment app - one content store plus its analysers.

Each app is an explicit instance handed to every Attachment it serves, so
several apps (e.g. images and videos) can coexist with different stores and
analysers.
"""

from typing import Any
from urllib.parse import quote, urlencode

from attachkit.config import Config
from attachkit.core.analysis.registry import AnalyserRegistry, AnalyserSource
from attachkit.core.content_store.base import ContentStore
from attachkit.core.content_store.memory_store import InMemoryContentStore
from attachkit.core.factory import AnalyserFactory, ContentStoreFactory
from attachkit.core.host.base import HostBinding
from attachkit.models.content import EphemeralContent
from attachkit.services.attachment import Attachment
from attachkit.services.lifecycle import LifecycleCoordinator
from attachkit.utils.logger import get_logger, setup_logging


class AttachmentApp:
    """
    Content store, analysers and lifecycle coordination for a family of attachments.

    Attributes:
        name: App name, bound into log records
        store: Content store backend
        analysers: Analyser registry
        lifecycle: Coordinator performing store/destroy on commit and release
        log: Logger used for lifecycle events (anything with info/warning)
    """

    def __init__(
        self,
        name: str = "default",
        store: ContentStore | None = None,
        analysers: AnalyserRegistry | None = None,
        url_host: str = "",
        url_path_prefix: str = "/media",
        log: Any = None,
    ):
        self.name = name
        self.store = store if store is not None else InMemoryContentStore()
        self.analysers = analysers if analysers is not None else AnalyserRegistry()
        self.url_host = url_host
        self.url_path_prefix = url_path_prefix
        self.log = log if log is not None else get_logger(__name__, app=name)
        self.lifecycle = LifecycleCoordinator(self)

    @classmethod
    def from_config(
        cls, config: Config, name: str = "default", configure_logging: bool = True
    ) -> "AttachmentApp":
        """
        Build an app from configuration.

        Args:
            config: Main configuration object
            name: App name
            configure_logging: Apply config.logging to the global loguru logger

        Returns:
            AttachmentApp with store and analysers created by the factories
        """
        if configure_logging:
            setup_logging(
                level=config.logging.level,
                log_to_file=config.logging.log_to_file,
                log_dir=config.logging.log_dir,
                file_rotation=config.logging.file_rotation,
                file_retention=config.logging.file_retention,
                compression=config.logging.compression,
                serialize=config.logging.serialize,
            )

        return cls(
            name=name,
            store=ContentStoreFactory.create(config.store, config.s3),
            analysers=AnalyserFactory.create(config.analysis),
            url_host=config.url.host,
            url_path_prefix=config.url.path_prefix,
        )

    def fetch(self, key: str) -> EphemeralContent:
        """Load content from the store. Raises DataNotFound if missing."""
        return self.store.fetch(key)

    def create_content(self, source: Any, name: str | None = None) -> EphemeralContent:
        return EphemeralContent.from_source(source, name=name)

    def register_analyser(self, source: AnalyserSource) -> list[str]:
        return self.analysers.register(source)

    def attachment(self, binding: HostBinding) -> Attachment:
        """Create an attachment served by this app for one host field."""
        return Attachment(self, binding)

    def url_for(self, key: str, **params: Any) -> str:
        """
        Build the URL under which persisted content is served.

        Args:
            key: Content key
            **params: Extra query parameters (e.g. processing options)

        Returns:
            "<host><prefix>/<key>[?params]"
        """
        url = f"{self.url_host.rstrip('/')}{self.url_path_prefix.rstrip('/')}/{quote(str(key))}"
        if params:
            url = f"{url}?{urlencode(sorted(params.items()))}"
        return url

    def close(self) -> None:
        self.store.close()

    def __repr__(self) -> str:
        return f"AttachmentApp(name={self.name!r}, store={type(self.store).__name__})"
