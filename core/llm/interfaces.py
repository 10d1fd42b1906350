"""
LLM Provider Interface - Abstract base for AI service providers.

This module defines the interface for LLM services (OpenAI, Ollama, Anthropic, etc.).
"""
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional


class LLMProvider(ABC):
    """
    Abstract Interface for AI Service Providers (OpenAI, Ollama, Anthropic, etc.).
    """

    @abstractmethod
    def extract_structured_data(
        self,
        text: str,
        schema_spec: Dict,
        system_prompt: Optional[str] = None,
        user_message: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Extract structured JSON data from text adhering to a schema.

        Args:
            text: Text to extract from
            schema_spec: Either a wrapped spec {'name', 'strict', 'schema'} or raw JSON schema
        """
        pass

    @abstractmethod
    def rank_candidates(self, prompt: str) -> Dict[str, Any]:
        """
        Ask the model to rank the candidates described in the prompt.

        Returns the raw response object, expected to look like
        {"rankings": [{"candidateId": int, "rank": int, "reason": str}]}.
        Callers validate it.
        """
        pass

    @abstractmethod
    def extract_resume_data(self, text: str) -> Dict[str, Any]:
        """
        Extract {"skills", "yearsExperience", "jobTitle", "relevantExperience"}
        from resume text.
        """
        pass
