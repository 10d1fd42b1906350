from database.repositories.base import BaseRepository
from database.repositories.job import JobRepository
from database.repositories.candidate import CandidateRepository
from database.repositories.score import ScoreRepository

__all__ = [
    'BaseRepository',
    'JobRepository',
    'CandidateRepository',
    'ScoreRepository',
]
