"""AI ranking overlay - optional secondary ranking of scored candidates."""
from ranking.models import AIRankingResult
from ranking.service import AIRankingService, normalize_rankings, set_manual_rank
from ranking.tasks import enqueue_ai_ranking, process_ai_ranking_task

__all__ = [
    'AIRankingResult',
    'AIRankingService',
    'normalize_rankings',
    'set_manual_rank',
    'enqueue_ai_ranking',
    'process_ai_ranking_task',
]
