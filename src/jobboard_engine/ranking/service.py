"""Top-N match lists for admin and employer ranking views."""

from typing import List, Optional, Sequence, Union

from jobboard_engine.config import settings
from jobboard_engine.core.models import (
    CandidateDescriptor,
    JobPostDescriptor,
    RankedCandidate,
    RankedJob,
)
from jobboard_engine.lifecycle.status import accepts_applications
from jobboard_engine.matching.engine import MatchingEngine, default_engine
from jobboard_engine.utils.cache import SearchCache, generate_cache_key
from jobboard_engine.utils.logging import get_logger

logger = get_logger(__name__)


class RankingService:
    """Filters a pool down to eligible entities, scores it and keeps the best."""

    def __init__(
        self,
        engine: Optional[MatchingEngine] = None,
        cache: Optional[SearchCache] = None,
        default_limit: Optional[int] = None
    ):
        self.logger = logger.bind(component="ranking_service")
        self.engine = engine or default_engine
        self.cache = cache
        self.default_limit = default_limit if default_limit is not None else settings.ranking_default_limit

    def top_matches(
        self,
        subject: Union[JobPostDescriptor, CandidateDescriptor],
        pool: Sequence[Union[CandidateDescriptor, JobPostDescriptor]],
        limit: Optional[int] = None
    ) -> Union[List[RankedCandidate], List[RankedJob]]:
        """
        Best matches for ``subject`` out of ``pool``.

        A job subject is matched against verified, non-deleted candidates; a
        candidate subject against non-deleted jobs that are open for
        applications. An empty pool yields an empty list.
        """
        if isinstance(subject, JobPostDescriptor):
            return self.top_candidates_for_job(subject, pool, limit)
        if isinstance(subject, CandidateDescriptor):
            return self.top_jobs_for_candidate(subject, pool, limit)
        raise TypeError(f"Cannot rank matches for {type(subject).__name__}")

    def top_candidates_for_job(
        self,
        job: JobPostDescriptor,
        candidates: Sequence[CandidateDescriptor],
        limit: Optional[int] = None
    ) -> List[RankedCandidate]:
        limit = self._resolve_limit(limit)
        eligible = [c for c in candidates if not c.deleted and c.is_verified]

        key = self._cache_key("candidates_for_job", job.id, [c.id for c in eligible], limit)
        cached = self._cached(key, "candidate")
        if cached is not None:
            return list(cached)

        ranked = self.engine.rank_candidates(job, eligible)[:limit]
        self._store(key, ranked, len(eligible), "candidate")

        self.logger.info(
            "Ranked candidates for job",
            job_id=job.id,
            pool_size=len(candidates),
            eligible=len(eligible),
            returned=len(ranked)
        )
        return ranked

    def top_jobs_for_candidate(
        self,
        candidate: CandidateDescriptor,
        jobs: Sequence[JobPostDescriptor],
        limit: Optional[int] = None
    ) -> List[RankedJob]:
        limit = self._resolve_limit(limit)
        eligible = [j for j in jobs if accepts_applications(j.status, j.deleted)]

        key = self._cache_key("jobs_for_candidate", candidate.id, [j.id for j in eligible], limit)
        cached = self._cached(key, "job")
        if cached is not None:
            return list(cached)

        ranked = self.engine.rank_jobs(candidate, eligible)[:limit]
        self._store(key, ranked, len(eligible), "job")

        self.logger.info(
            "Ranked jobs for candidate",
            candidate_id=candidate.id,
            pool_size=len(jobs),
            eligible=len(eligible),
            returned=len(ranked)
        )
        return ranked

    def _resolve_limit(self, limit: Optional[int]) -> int:
        limit = self.default_limit if limit is None else limit
        return max(0, limit)

    def _cache_key(self, query: str, subject_id, pool_ids, limit: int) -> Optional[str]:
        if self.cache is None:
            return None
        return generate_cache_key({
            "query": query,
            "subject": subject_id,
            "pool": pool_ids,
            "limit": limit
        })

    def _cached(self, key: Optional[str], entity_type: str):
        if key is None:
            return None
        return self.cache.get(key, entity_type=entity_type)

    def _store(self, key: Optional[str], ranked: list, record_count: int, entity_type: str) -> None:
        if key is None:
            return
        self.cache.set(key, ranked, record_count=record_count, entity_type=entity_type)


def top_matches(
    subject: Union[JobPostDescriptor, CandidateDescriptor],
    pool: Sequence[Union[CandidateDescriptor, JobPostDescriptor]],
    limit: Optional[int] = None
) -> Union[List[RankedCandidate], List[RankedJob]]:
    """Module-level shortcut over an uncached RankingService."""
    return RankingService().top_matches(subject, pool, limit)
