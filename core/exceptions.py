#!/usr/bin/env python3
"""
Custom exceptions for the scoring and ranking core.
"""

from typing import Optional


class ServiceException(Exception):
    """Base exception for service layer errors."""
    pass


class ValidationError(ServiceException):
    """Raised when caller-supplied input is malformed (weights, requirements, ranks)."""
    pass


class NotFoundError(ServiceException):
    """Raised when a job or candidate is missing."""
    pass


class JobNotFoundError(NotFoundError):
    """Raised when a job is not found."""

    def __init__(self, job_id):
        super().__init__(f"Job {job_id} not found")
        self.job_id = job_id


class CandidateNotFoundError(NotFoundError):
    """Raised when a candidate is not found."""

    def __init__(self, candidate_id):
        super().__init__(f"Candidate {candidate_id} not found")
        self.candidate_id = candidate_id


class RescoreSupersededError(ServiceException):
    """Raised when a rescore pass is abandoned because a newer pass was requested."""

    def __init__(self, job_id, ticket: int, latest_ticket: int):
        super().__init__(
            f"Rescore of job {job_id} (ticket {ticket}) superseded by ticket {latest_ticket}"
        )
        self.job_id = job_id
        self.ticket = ticket
        self.latest_ticket = latest_ticket


class ExtractionDegraded(ServiceException):
    """
    A profile field could not be determined from the resume text.

    Never raised. Instances are collected on ProfileFragment.degradations so
    callers can see which fields fell back to conservative defaults.
    """

    def __init__(self, field: str, reason: str, detail: Optional[str] = None):
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason
        self.detail = detail

    def __eq__(self, other):
        if not isinstance(other, ExtractionDegraded):
            return NotImplemented
        return (self.field, self.reason, self.detail) == (other.field, other.reason, other.detail)

    def __hash__(self):
        return hash((self.field, self.reason, self.detail))
