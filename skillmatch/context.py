"""AppContext: wires DB, config, and services together."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from skillmatch.config import AppConfig, load_config
from skillmatch.infra.db.client import MongoClient

if TYPE_CHECKING:
    from pathlib import Path

    from skillmatch.infra.db.developers import DeveloperRepo
    from skillmatch.infra.db.skills import SkillRepo
    from skillmatch.infra.db.tasks import TaskRepo
    from skillmatch.infra.providers.base import LLMProvider
    from skillmatch.services.developer_service import DeveloperService
    from skillmatch.services.skill_inference import SkillInferenceService
    from skillmatch.services.skill_service import SkillService
    from skillmatch.services.task_service import TaskService

logger = logging.getLogger(__name__)


class AppContext:
    """Central wiring for all application dependencies.

    Lazily initializes services on first access. Call `initialize()` to
    set up the database connection and run migrations.
    """

    def __init__(self, config: AppConfig | None = None, config_path: Path | None = None) -> None:
        self.config = config or load_config(config_path)
        self._mongo: MongoClient | None = None
        self._task_repo: TaskRepo | None = None
        self._developer_repo: DeveloperRepo | None = None
        self._skill_repo: SkillRepo | None = None
        self._skill_service: SkillService | None = None
        self._developer_service: DeveloperService | None = None
        self._inference_provider: LLMProvider | None = None
        self._inference_service: SkillInferenceService | None = None
        self._task_service: TaskService | None = None

    async def initialize(self) -> None:
        """Initialize the database connection and run migrations."""
        from skillmatch.infra.db.migrations import run_migrations

        self._mongo = MongoClient(
            uri=self.config.mongodb.uri,
            database=self.config.mongodb.database,
        )
        await run_migrations(self._mongo.db)
        logger.info("AppContext initialized")

    async def close(self) -> None:
        """Close all connections."""
        if self._mongo:
            self._mongo.close()
        if self._inference_provider is not None:
            await self._inference_provider.close()
            self._inference_provider = None
        logger.info("AppContext closed")

    @property
    def mongo(self) -> MongoClient:
        if self._mongo is None:
            raise RuntimeError("AppContext not initialized. Call initialize() first.")
        return self._mongo

    @property
    def task_repo(self) -> TaskRepo:
        if self._task_repo is None:
            from skillmatch.infra.db.tasks import TaskRepo

            self._task_repo = TaskRepo(self.mongo.db)
        return self._task_repo

    @property
    def developer_repo(self) -> DeveloperRepo:
        if self._developer_repo is None:
            from skillmatch.infra.db.developers import DeveloperRepo

            self._developer_repo = DeveloperRepo(self.mongo.db)
        return self._developer_repo

    @property
    def skill_repo(self) -> SkillRepo:
        if self._skill_repo is None:
            from skillmatch.infra.db.skills import SkillRepo

            self._skill_repo = SkillRepo(self.mongo.db)
        return self._skill_repo

    @property
    def skill_service(self) -> SkillService:
        if self._skill_service is None:
            from skillmatch.services.skill_service import SkillService

            self._skill_service = SkillService(self.skill_repo)
        return self._skill_service

    @property
    def developer_service(self) -> DeveloperService:
        if self._developer_service is None:
            from skillmatch.services.developer_service import DeveloperService

            self._developer_service = DeveloperService(
                developer_repo=self.developer_repo,
                skill_service=self.skill_service,
                task_repo=self.task_repo,
            )
        return self._developer_service

    @property
    def inference_service(self) -> SkillInferenceService:
        """Skill inference; does not need the database."""
        if self._inference_service is None:
            from skillmatch.infra.providers.registry import build_inference_provider
            from skillmatch.models.provider import LLMConfig
            from skillmatch.services.skill_inference import SkillInferenceService

            inference = self.config.inference
            self._inference_provider = build_inference_provider(self.config)
            self._inference_service = SkillInferenceService(
                provider=self._inference_provider,
                llm_config=LLMConfig(
                    model=inference.model,
                    max_tokens=inference.max_tokens,
                    temperature=inference.temperature,
                ),
            )
        return self._inference_service

    @property
    def task_service(self) -> TaskService:
        if self._task_service is None:
            from skillmatch.services.task_service import TaskService

            self._task_service = TaskService(
                task_repo=self.task_repo,
                developer_repo=self.developer_repo,
                skill_service=self.skill_service,
                inference=self.inference_service,
            )
        return self._task_service
