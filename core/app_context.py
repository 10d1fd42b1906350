from dataclasses import dataclass
from typing import Optional

from core.config_loader import AppConfig, AIRankingConfig
from core.llm.openai_service import OpenAIService
from core.scorer.service import ScoringService
from etl.resume.extractor import ProfileExtractor
from pipeline.rescore import RescoreOrchestrator
from ranking.service import AIRankingService


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    This eliminates duplicate wiring code and provides a single source
    of truth for service instantiation. DB access is obtained via uow()
    inside each service call.
    """
    config: AppConfig
    extractor: ProfileExtractor
    scoring_service: ScoringService
    rescore_orchestrator: RescoreOrchestrator
    ranking_service: Optional[AIRankingService] = None

    @classmethod
    def build(cls, config: AppConfig, session_factory=None) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration
            session_factory: Session factory override (defaults to SessionLocal)

        Returns:
            Fully wired AppContext instance (no DB session attached)
        """
        extractor = ProfileExtractor(config.extraction)
        scoring_service = ScoringService(config.scorer, session_factory=session_factory)
        rescore_orchestrator = RescoreOrchestrator(
            scoring_service=scoring_service,
            config=config.rescore,
            session_factory=session_factory,
        )

        # AI ranking overlay (lazy - only if enabled)
        ranking_service = None
        if config.ai_ranking and config.ai_ranking.enabled:
            ranking_service = AIRankingService(
                provider=cls._build_ai_service(config.ai_ranking),
                config=config.ai_ranking,
                session_factory=session_factory,
            )

        return cls(
            config=config,
            extractor=extractor,
            scoring_service=scoring_service,
            rescore_orchestrator=rescore_orchestrator,
            ranking_service=ranking_service,
        )

    @staticmethod
    def _build_ai_service(ai_config: AIRankingConfig) -> OpenAIService:
        """Build OpenAI service from AI ranking configuration."""
        return OpenAIService(
            base_url=ai_config.base_url,
            api_key=ai_config.api_key,
            model=ai_config.model,
            temperature=ai_config.temperature,
        )
