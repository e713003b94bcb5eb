"""
OpenRouter Match Oracle
Asks an LLM for a structured {score, explanation} verdict on a job/freelancer pair
"""
import json
from typing import Union

from pydantic import BaseModel, ValidationError, field_validator

from application.services.ai_match import IMatchOracle, MatchRequest, MatchResult
from domain.enums import MatchSource
from domain.value_objects import MatchScore
from core.exceptions import OracleException
from infrastructure.external.openrouter_client import OpenRouterClient


PROMPT_TEMPLATE = """Analyze the compatibility between a job and a freelancer profile.

Job Details:
Description: {job_description}
Required Skills: {job_skills}

Freelancer Profile:
Bio: {freelancer_bio}
Skills: {freelancer_skills}

Provide a JSON response with:
1. A match score from 0 to 100
2. A brief explanation of the score

Focus on:
- Skill match percentage
- Experience relevance
- Project requirements alignment

Return only the JSON object with "score" and "explanation" keys."""


class OracleMatchReply(BaseModel):
    """Shape the oracle must reply with"""

    score: Union[int, float]
    explanation: str

    @field_validator("score", mode="before")
    @classmethod
    def validate_score(cls, v):
        # Booleans and numeric strings are not scores
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("score must be a number")
        if v != v or not 0 <= v <= 100:
            raise ValueError("score must be between 0 and 100")
        return v

    @field_validator("explanation")
    @classmethod
    def validate_explanation(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("explanation cannot be empty")
        return v.strip()


class OpenRouterMatchOracle(IMatchOracle):
    """Match oracle backed by an OpenRouter chat model"""

    def __init__(self, client: OpenRouterClient, model: str = "gpt-4o-mini"):
        self.client = client
        self.model = model

    def build_prompt(self, request: MatchRequest) -> str:
        return PROMPT_TEMPLATE.format(
            job_description=request.job_description[:2000],
            job_skills=", ".join(request.job_skills),
            freelancer_bio=request.freelancer_bio[:2000],
            freelancer_skills=", ".join(request.freelancer_skills),
        )

    async def score(self, request: MatchRequest) -> MatchResult:
        content = await self.client.chat(
            messages=[{"role": "user", "content": self.build_prompt(request)}],
            model=self.model,
            temperature=0.0,
            max_tokens=300,
            json_mode=True,
        )
        return self.parse_reply(content)

    @staticmethod
    def parse_reply(content: str) -> MatchResult:
        """Validate a raw oracle reply, raising OracleException when malformed"""
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise OracleException(f"Oracle reply is not JSON: {e}") from e
        if not isinstance(data, dict):
            raise OracleException("Oracle reply is not a JSON object")

        try:
            reply = OracleMatchReply.model_validate(data)
        except ValidationError as e:
            raise OracleException(f"Malformed oracle reply: {e.errors()}") from e

        return MatchResult(
            score=MatchScore.from_number(reply.score),
            explanation=reply.explanation,
            source=MatchSource.ORACLE,
        )
