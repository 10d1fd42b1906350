import yaml
import os
from typing import Optional
from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///resumerank.db"


class WeightsConfig(BaseModel):
    """Default weight vector used when the caller supplies none.

    Lives in config rather than in the aggregator so every scoring call
    receives an explicit ScoreWeights value.
    """
    skills: float = 0.5
    title: float = 0.2
    seniority: float = 0.15
    recency: float = 0.1
    gaps: float = 0.05

    def to_score_weights(self) -> "ScoreWeights":
        from core.scorer.models import ScoreWeights

        return ScoreWeights(
            skills=self.skills,
            title=self.title,
            seniority=self.seniority,
            recency=self.recency,
            gaps=self.gaps,
        )


class ScorerConfig(BaseModel):
    """
    Configuration for the ScoringService (deterministic multi-factor scoring).
    """
    # Skill coverage: a must-have counts this many times a nice-to-have
    must_weight: float = 2.0
    nice_weight: float = 1.0

    # Gap penalty = min(100, total_gap_months * gap_penalty_per_month)
    gap_penalty_per_month: float = 5.0

    # Title similarity curve
    title_floor: float = 20.0
    title_ceiling: float = 95.0

    default_weights: WeightsConfig = Field(default_factory=WeightsConfig)


class ExtractionConfig(BaseModel):
    """Configuration for resume profile extraction."""
    # Idle periods of this many whole months or fewer are not reported as gaps
    min_gap_months: int = 2
    # How much of the document head is searched for a role title when no timeline exists
    head_chars: int = 1000
    # Thread pool size for batch extraction of new uploads
    max_workers: int = 4


class RescoreConfig(BaseModel):
    """Configuration for job-wide rescoring."""
    max_workers: int = 8


class AIRankingConfig(BaseModel):
    """
    Configuration for the optional AI ranking overlay.

    The overlay never touches deterministic score fields; it only writes
    ai_rank / ai_rank_reason.
    """
    enabled: bool = False
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    model: str = "gpt-4o-mini"
    temperature: float = 0.1

    # Redis queue settings
    use_async_queue: bool = True
    redis_url: Optional[str] = None
    queue_name: str = "ai_ranking"

    cache_ttl_seconds: int = 3600


class AppConfig(BaseModel):
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    scorer: ScorerConfig = Field(default_factory=ScorerConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    rescore: RescoreConfig = Field(default_factory=RescoreConfig)
    ai_ranking: AIRankingConfig = Field(default_factory=AIRankingConfig)


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from a subdirectory), try the repo root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    data = {}
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

    # Allow env var override for DB URL
    env_db_url = os.environ.get("DATABASE_URL")
    if env_db_url:
        data.setdefault('database', {})
        data['database']['url'] = env_db_url

    # Allow env var overrides for the AI ranking overlay
    env_redis_url = os.environ.get("REDIS_URL")
    if env_redis_url:
        data.setdefault('ai_ranking', {})
        data['ai_ranking']['redis_url'] = env_redis_url

    env_llm_base_url = os.environ.get("LLM_BASE_URL")
    if env_llm_base_url:
        data.setdefault('ai_ranking', {})
        data['ai_ranking']['base_url'] = env_llm_base_url

    env_llm_api_key = os.environ.get("LLM_API_KEY")
    if env_llm_api_key:
        data.setdefault('ai_ranking', {})
        data['ai_ranking']['api_key'] = env_llm_api_key

    return AppConfig(**data)
