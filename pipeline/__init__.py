"""Pipeline execution modules for ResumeRank."""

from .control import RescoreController, rescore_controller
from .rescore import RescoreOrchestrator, RescoreResult, rescore_job

__all__ = [
    'RescoreController',
    'rescore_controller',
    'RescoreOrchestrator',
    'RescoreResult',
    'rescore_job',
]
