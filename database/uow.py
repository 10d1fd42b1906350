import contextlib
import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from database.database import SessionLocal
from database.repositories import JobRepository, CandidateRepository, ScoreRepository

logger = logging.getLogger(__name__)


@dataclass
class UnitOfWork:
    """Repositories sharing one Session (and therefore one transaction)."""
    session: Session
    jobs: JobRepository
    candidates: CandidateRepository
    scores: ScoreRepository


@contextlib.contextmanager
def uow(session_factory=None):
    """Per-unit-of-work transaction scope.

    Yields a UnitOfWork bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with uow() as work:
            job = work.jobs.get_by_id(job_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    session = (session_factory or SessionLocal)()
    try:
        yield UnitOfWork(
            session=session,
            jobs=JobRepository(session),
            candidates=CandidateRepository(session),
            scores=ScoreRepository(session),
        )
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
