"""
Dependency Injection Container
Builds the database, oracle clients and services from settings
"""
from typing import Optional

from core.config import Settings, settings as default_settings
from core.database import Database
from core.logging_config import configure_logging, logger
from application.repositories.interfaces import IUnitOfWork
from application.services.ai_match import IAIMatchService, IMatchOracle
from application.services.career_guide import ICareerGuideService
from application.services.jobs import IJobService, JobService
from application.services.proposals import (
    IProposalLifecycleService,
    ProposalLifecycleService,
    ProposalLockRegistry,
)
from application.services.users import IUserService, UserService
from infrastructure.external.openrouter_client import OpenRouterClient
from infrastructure.persistence.unit_of_work import SQLAlchemyUnitOfWork
from infrastructure.services.ai_match_service import AIMatchService
from infrastructure.services.career_guide_service import CareerGuideService
from infrastructure.services.openrouter_match_oracle import OpenRouterMatchOracle


class ServiceContainer:
    """
    Application-wide service graph.

    Instances are created lazily and cached; the proposal lock registry in
    particular must be shared by every lifecycle service in the process.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        database: Optional[Database] = None,
        oracle: Optional[IMatchOracle] = None,
        setup_logging: bool = True,
    ):
        self.settings = settings or default_settings
        if setup_logging:
            configure_logging(self.settings)

        self.database = database or Database(self.settings)
        self._oracle = oracle
        self._openrouter: Optional[OpenRouterClient] = None
        self._locks = ProposalLockRegistry()
        self._match_service: Optional[IAIMatchService] = None
        self._career_guide: Optional[ICareerGuideService] = None

    def unit_of_work(self) -> IUnitOfWork:
        """New unit of work (per operation)"""
        return SQLAlchemyUnitOfWork(self.database.session_factory)

    def get_openrouter_client(self) -> OpenRouterClient:
        """Get OpenRouter client instance (singleton)"""
        if self._openrouter is None:
            self._openrouter = OpenRouterClient(
                api_key=self.settings.OPENROUTER_API_KEY,
                api_url=self.settings.OPENROUTER_API_URL,
                timeout=self.settings.ORACLE_TIMEOUT_SECONDS,
            )
        return self._openrouter

    def get_match_oracle(self) -> IMatchOracle:
        """Get match oracle instance (singleton)"""
        if self._oracle is None:
            self._oracle = OpenRouterMatchOracle(
                self.get_openrouter_client(),
                model=self.settings.MATCH_MODEL,
            )
        return self._oracle

    def get_match_service(self) -> IAIMatchService:
        """Get AI match service instance (singleton)"""
        if self._match_service is None:
            self._match_service = AIMatchService(
                oracle=self.get_match_oracle(),
                timeout=self.settings.ORACLE_TIMEOUT_SECONDS,
                default_limit=self.settings.MATCH_DEFAULT_LIMIT,
                max_concurrency=self.settings.MATCH_MAX_CONCURRENCY,
            )
        return self._match_service

    def get_career_guide(self) -> ICareerGuideService:
        """Get career guide instance (singleton)"""
        if self._career_guide is None:
            self._career_guide = CareerGuideService(
                self.get_openrouter_client(),
                model=self.settings.CAREER_GUIDE_MODEL,
            )
        return self._career_guide

    def get_proposal_service(self) -> IProposalLifecycleService:
        """Get proposal lifecycle service (shares the process-wide lock registry)"""
        return ProposalLifecycleService(
            self.unit_of_work,
            locks=self._locks,
            offer_cover_letter=self.settings.OFFER_COVER_LETTER,
        )

    def get_job_service(self) -> IJobService:
        return JobService(self.unit_of_work, self.get_match_service())

    def get_user_service(self) -> IUserService:
        return UserService(self.unit_of_work)

    async def startup(self) -> None:
        """Create tables if missing"""
        await self.database.init_models()
        logger.info(f"{self.settings.APP_NAME} services ready ({self.settings.ENVIRONMENT})")

    async def shutdown(self) -> None:
        await self.database.dispose()
