"""
Public application facade for Movie Pitch Service.

This is the single stable entry point for the library.
All internal structure can change freely, but this API remains stable.
"""
import logging
import os
from pathlib import Path
from typing import Optional

from .config import MoviePitchConfig
from .config_validator import get_required_env
from .generation import LangChainGenerationClient, OpenAIImageGenerator
from .generation.llm_factory import get_llm_instance
from .orchestration import RegenerationOrchestrator
from .service import MoviePitchService
from .state import InMemoryBackend, JsonFileBackend, StateStoreManager
from .storage import LocalBlobStore

logger = logging.getLogger(__name__)


class MoviePitchApp:
    """
    Public application facade for Movie Pitch Service.

    All dependency wiring and factory usage is encapsulated here.

    Usage:
        config = load_config_from_env()
        app = MoviePitchApp(config)
        app.initialize()
        response = app.service.regenerate("giant-robots", "Giant Robots")
    """

    def __init__(self, config: MoviePitchConfig):
        """
        :param config: MoviePitchConfig instance
        """
        self._config = config
        self._service: Optional[MoviePitchService] = None
        self._orchestrator: Optional[RegenerationOrchestrator] = None
        self._blob_store: Optional[LocalBlobStore] = None

    @property
    def service(self) -> MoviePitchService:
        if not self._service:
            raise RuntimeError("App not initialized. Call initialize() first.")
        return self._service

    @property
    def blob_store(self) -> LocalBlobStore:
        if not self._blob_store:
            raise RuntimeError("App not initialized. Call initialize() first.")
        return self._blob_store

    def initialize(self) -> None:
        """
        Wire all dependencies.

        This method:
        - Resolves relative storage paths against the service directory
        - Creates the state backend and per-session store manager
        - Creates the chat model and (optionally) the poster image generator
        - Creates the blob store, orchestrator and service

        Call this once before using the service.
        """
        if self._service:
            return

        service_dir = Path(__file__).parent.parent.parent

        blob_dir = self._config.blob_dir
        if not os.path.isabs(blob_dir):
            blob_dir = str(service_dir / blob_dir)

        if self._config.state_dir:
            state_dir = self._config.state_dir
            if not os.path.isabs(state_dir):
                state_dir = str(service_dir / state_dir)
            backend = JsonFileBackend(state_dir)
            logger.info(f"Persisting session state to {state_dir}")
        else:
            backend = InMemoryBackend()
            logger.info("Keeping session state in memory")

        stores = StateStoreManager(backend=backend, default_title=self._config.default_title)

        llm = get_llm_instance(
            provider=self._config.llm_provider,
            model=self._config.llm_model,
            timeout=self._config.generation_timeout_s,
            temperature=self._config.llm_temperature,
        )

        image_generator = None
        if self._config.enable_posters:
            image_generator = OpenAIImageGenerator(
                api_key=get_required_env(
                    "OPENAI_API_KEY",
                    description="OpenAI API key for poster images (get from https://platform.openai.com/api-keys)"
                ),
                model=self._config.image_model,
                size=self._config.image_size,
                timeout=self._config.generation_timeout_s,
            )
        else:
            logger.warning("Poster generation disabled; poster steps will report failure")

        self._blob_store = LocalBlobStore(blob_dir, base_url=self._config.blob_base_url)
        self._orchestrator = RegenerationOrchestrator(
            stores=stores,
            generation_client=LangChainGenerationClient(llm, image_generator=image_generator),
            blob_store=self._blob_store,
            generation_timeout_s=self._config.generation_timeout_s,
            parallel_fanout=self._config.parallel_fanout,
            max_workers=self._config.max_workers,
        )
        self._service = MoviePitchService(self._orchestrator, stores)
        logger.info(
            f"Movie pitch service initialized (provider={self._config.llm_provider}, "
            f"model={self._config.llm_model}, posters={self._config.enable_posters})"
        )

    def close(self) -> None:
        if self._orchestrator:
            self._orchestrator.close()
