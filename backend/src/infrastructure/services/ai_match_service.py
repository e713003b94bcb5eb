"""
AIMatchService Implementation
Ranks freelancers for a job using the match oracle, with a skill-overlap fallback
"""
import asyncio
from typing import List, Optional, Sequence

from application.services.ai_match import (
    IAIMatchService,
    IMatchOracle,
    MatchRequest,
    MatchResult,
    RankedCandidate,
)
from domain.entities import Job, User
from domain.enums import MatchSource
from domain.value_objects import MatchScore
from core.logging_config import logger


class AIMatchService(IAIMatchService):
    """AI match service implementation"""

    def __init__(
        self,
        oracle: Optional[IMatchOracle],
        timeout: float = 10.0,
        default_limit: int = 5,
        max_concurrency: int = 8,
    ):
        """
        Initialize AI match service

        Args:
            oracle: Match oracle; None means always use the fallback
            timeout: Per-candidate oracle timeout in seconds
            default_limit: Ranking size when the caller gives none
            max_concurrency: Maximum oracle calls in flight per ranking
        """
        self.oracle = oracle
        self.timeout = timeout
        self.default_limit = default_limit
        self.max_concurrency = max_concurrency

    async def score_match(self, job: Job, freelancer: User) -> MatchResult:
        """
        Calculate match score between a job and a freelancer

        Any oracle failure, timeout or malformed reply is logged and
        replaced by the deterministic skill-overlap score.
        """
        if self.oracle is None:
            return self.fallback_score(job, freelancer)

        try:
            result = await asyncio.wait_for(
                self.oracle.score(MatchRequest.for_pair(job, freelancer)),
                timeout=self.timeout,
            )
            logger.debug(f"Oracle match score {result.score} for job {job.id} / freelancer {freelancer.id}")
            return result
        except asyncio.TimeoutError:
            logger.warning(f"Oracle timed out after {self.timeout}s for job {job.id} / freelancer {freelancer.id}")
        except Exception as e:
            logger.warning(f"Oracle failed for job {job.id} / freelancer {freelancer.id}: {e}")

        return self.fallback_score(job, freelancer)

    @staticmethod
    def fallback_score(job: Job, freelancer: User) -> MatchResult:
        """
        Deterministic score from the share of job skills the freelancer has

        Skills match ignoring case and surrounding whitespace, so "React" and
        "react " count as one skill; a case-sensitive matcher would score
        mixed-case skill lists lower.
        """
        matched = job.skills.overlap_count(freelancer.skills)
        return MatchResult(
            score=MatchScore.from_skill_overlap(job.skills, freelancer.skills),
            explanation=f"Basic match based on {matched} overlapping skills",
            source=MatchSource.FALLBACK,
        )

    async def rank_candidates(
        self,
        job: Job,
        freelancers: Sequence[User],
        limit: Optional[int] = None
    ) -> List[RankedCandidate]:
        """
        Score every candidate concurrently and return the best ones

        Args:
            job: Job to match against
            freelancers: Candidate pool, in the caller's preferred tie order
            limit: Maximum results (default from configuration)

        Returns:
            Ranked candidates, best first
        """
        limit = self.default_limit if limit is None else limit
        if limit <= 0 or not freelancers:
            return []

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def evaluate(freelancer: User) -> RankedCandidate:
            async with semaphore:
                result = await self.score_match(job, freelancer)
            return RankedCandidate(
                freelancer=freelancer,
                score=result.score.value,
                explanation=result.explanation,
                source=result.source,
            )

        ranked = await asyncio.gather(*(evaluate(f) for f in freelancers))

        # sorted() is stable, so equal scores keep input order
        ranked = sorted(ranked, key=lambda c: c.score, reverse=True)[:limit]

        fallbacks = sum(1 for c in ranked if c.source == MatchSource.FALLBACK)
        logger.info(
            f"Ranked {len(freelancers)} freelancers for job {job.id}, "
            f"returning {len(ranked)} ({fallbacks} fallback scores)"
        )
        return ranked
