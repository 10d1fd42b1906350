"""
Pydantic models and JSON schemas for LLM structured output.

This module provides:
1. Validation models for AI ranking responses
2. JSON schemas handed to the provider for structured output
"""
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RankingEntry(BaseModel):
    """One candidate's position in an AI ranking."""
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    candidate_id: int = Field(alias='candidateId', description="Candidate id as given in the prompt")
    rank: int = Field(ge=1, description="1 is the best fit")
    reason: Optional[str] = Field(default=None, description="Why the candidate is placed here")


class RankingResponse(BaseModel):
    """Envelope of an AI ranking response; entries are validated one by one."""
    model_config = ConfigDict(extra='ignore')

    rankings: List[Any] = Field(description="Ranked candidates")


RANKING_SCHEMA = {
    "name": "candidate_rankings",
    "strict": True,
    "schema": {
        "type": "object",
        "additionalProperties": False,
        "properties": {
            "rankings": {
                "type": "array",
                "items": {
                    "type": "object",
                    "additionalProperties": False,
                    "properties": {
                        "candidateId": {"type": "integer"},
                        "rank": {"type": "integer"},
                        "reason": {"type": "string"},
                    },
                    "required": ["candidateId", "rank", "reason"],
                },
            },
        },
        "required": ["rankings"],
    },
}

RESUME_EXTRACTION_SCHEMA = {
    "name": "resume_profile",
    "strict": True,
    "schema": {
        "type": "object",
        "additionalProperties": False,
        "properties": {
            "skills": {"type": "array", "items": {"type": "string"}},
            "yearsExperience": {"type": ["number", "null"]},
            "jobTitle": {"type": ["string", "null"]},
            "relevantExperience": {"type": "array", "items": {"type": "string"}},
        },
        "required": ["skills", "yearsExperience", "jobTitle", "relevantExperience"],
    },
}
