import threading
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class RescoreController:
    """
    Per-job serialization for rescore passes, newest request wins.

    Every request takes a monotonically increasing ticket for its job. Passes
    for the same job run one at a time under the job's lock; a pass whose
    ticket is no longer the latest must abandon its work without persisting.
    Across processes the job row lock (SELECT ... FOR UPDATE) provides the
    serialization; tickets are tracked in this process only.
    """
    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[Any, threading.Lock] = {}
        self._tickets: Dict[Any, int] = {}

    def next_ticket(self, job_id: Any) -> int:
        """Register a new rescore request for the job and return its ticket."""
        with self._guard:
            ticket = self._tickets.get(job_id, 0) + 1
            self._tickets[job_id] = ticket
            return ticket

    def latest_ticket(self, job_id: Any) -> int:
        with self._guard:
            return self._tickets.get(job_id, 0)

    def is_current(self, job_id: Any, ticket: int) -> bool:
        return self.latest_ticket(job_id) == ticket

    def job_lock(self, job_id: Any) -> threading.Lock:
        """The lock serializing passes for one job (usable as a context manager)."""
        with self._guard:
            lock = self._locks.get(job_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[job_id] = lock
            return lock

    def get_lock_info(self, job_id: Any) -> Optional[Dict]:
        """Current ticket and lock state for one job, or None if never requested."""
        with self._guard:
            if job_id not in self._tickets:
                return None
            lock = self._locks.get(job_id)
            return {
                "job_id": job_id,
                "latest_ticket": self._tickets[job_id],
                "running": bool(lock and lock.locked()),
            }


# Shared by every orchestrator in the process
rescore_controller = RescoreController()
