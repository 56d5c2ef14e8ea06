"""Compatibility scoring between job posts and candidate profiles."""

import re
from fractions import Fraction
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from jobboard_engine.core.models import (
    CandidateDescriptor,
    JobPostDescriptor,
    MatchFactors,
    MatchResult,
    RankedCandidate,
    RankedJob,
)
from jobboard_engine.core.normalize import percent, round_half_up
from jobboard_engine.utils.logging import get_logger

logger = get_logger(__name__)

_token_re = re.compile(r"[a-z0-9.]+")


class MatchingEngine:
    """Scores a job post against a candidate on five weighted sub-factors.

    Scoring is pure: the engine holds only constant lookup tables, so one
    instance can be shared across threads.
    """

    def __init__(self):
        self.logger = logger.bind(component="matching_engine")

        # Factor weights, in percent
        self.factor_weights = {
            "skills": 40,
            "experience": 20,
            "salary": 20,
            "location": 10,
            "qualification": 10
        }

        self.qualification_tiers = self._load_qualification_tiers()
        self.city_gazetteer = self._load_city_gazetteer()

    def _load_qualification_tiers(self) -> List[Tuple[int, List[str]]]:
        """Qualification keywords by level, highest level first."""
        return [
            (4, ["phd", "ph.d", "doctorate", "doctoral"]),
            (3, [
                "master", "mba", "mtech", "m.tech", "msc", "m.sc", "mca", "me", "ms",
                "mcom", "m.com", "mphil", "mpharm", "llm", "mds", "mfa"
            ]),
            (2, [
                "bachelor", "btech", "b.tech", "bsc", "b.sc", "bcom", "b.com", "bca", "be", "ba",
                "bba", "barch", "b.arch", "bpharm", "b.pharm", "bds", "llb", "bfa", "bed", "b.ed"
            ]),
            (1, ["diploma", "associate"]),
        ]

    def _load_city_gazetteer(self) -> Dict[str, List[str]]:
        """Known cities and the spellings they go by."""
        return {
            "bangalore": ["bangalore", "bengaluru"],
            "mumbai": ["mumbai", "bombay"],
            "delhi": ["delhi"],
            "chennai": ["chennai", "madras"],
            "hyderabad": ["hyderabad"],
            "pune": ["pune"],
            "kolkata": ["kolkata", "calcutta"],
        }

    def score(self, job: JobPostDescriptor, candidate: CandidateDescriptor) -> MatchResult:
        """
        Score one candidate against one job post.

        Args:
            job: Job post to match against
            candidate: Candidate profile

        Returns:
            Weighted 0-100 score and the five sub-factor scores
        """
        factors = MatchFactors(
            skills_score=self.skills_score(job.skills, candidate.skills),
            experience_score=self.experience_score(job.required_years, candidate.total_years),
            salary_score=self.salary_score(job.salary_bounds, candidate.expected_salary),
            location_score=self.location_score(job.location, candidate.address),
            qualification_score=self.qualification_score(
                job.min_qualification, [q.degree for q in candidate.qualifications]
            ),
        )
        return MatchResult(score=self._weighted_total(factors), factors=factors)

    def _weighted_total(self, factors: MatchFactors) -> int:
        weights = self.factor_weights
        total = (
            factors.skills_score * weights["skills"] +
            factors.experience_score * weights["experience"] +
            factors.salary_score * weights["salary"] +
            factors.location_score * weights["location"] +
            factors.qualification_score * weights["qualification"]
        )
        return round_half_up(Fraction(total, sum(weights.values())))

    def skills_score(self, job_skills: Iterable[str], candidate_skills: Iterable[str]) -> int:
        """Share of required skills covered, with loose two-way substring matching."""
        required = [skill.lower() for skill in job_skills]
        if not required:
            return 100

        offered = [skill.lower() for skill in candidate_skills]
        matched = sum(
            1 for skill in required
            if any(own in skill or skill in own for own in offered)
        )
        return percent(matched, len(required))

    def experience_score(self, required_years: int, candidate_years: int) -> int:
        if required_years == 0 or candidate_years >= required_years:
            return 100
        if candidate_years == 0:
            return 0
        return percent(candidate_years, required_years)

    def salary_score(self, salary_bounds: Optional[Tuple[int, int]], expected_salary: int) -> int:
        """Full marks inside the range, falling off with distance from its midpoint."""
        if salary_bounds is None or expected_salary == 0:
            return 100

        low, high = salary_bounds
        if low <= expected_salary <= high:
            return 100

        midpoint = Fraction(low + high, 2)
        difference = abs(expected_salary - midpoint)
        denominator = max(Fraction(expected_salary), midpoint)
        return max(0, round_half_up(100 - difference / denominator * 100))

    def location_score(self, job_location: str, candidate_address: str) -> int:
        if not job_location or not candidate_address:
            return 100

        job_location = job_location.lower()
        candidate_address = candidate_address.lower()
        if job_location in candidate_address or candidate_address in job_location:
            return 100

        job_city = self._find_city(job_location)
        candidate_city = self._find_city(candidate_address)
        if job_city and job_city == candidate_city:
            return 80

        # Location is a soft signal; a mismatch never disqualifies.
        return 50

    def _find_city(self, text: str) -> Optional[str]:
        for city, spellings in self.city_gazetteer.items():
            if any(spelling in text for spelling in spellings):
                return city
        return None

    def qualification_level(self, qualification: str) -> int:
        """Map a qualification to its tier; 0 when no keyword matches.

        Keywords of three letters or fewer ("me", "ba", "mba") must match a
        whole word, ignoring dots, so "commerce" does not read as "me".
        """
        text = (qualification or "").lower()
        tokens = {token.replace(".", "") for token in _token_re.findall(text)}
        for level, keywords in self.qualification_tiers:
            for keyword in keywords:
                if len(keyword) <= 3:
                    if keyword in tokens:
                        return level
                elif keyword in text:
                    return level
        return 0

    def qualification_score(self, min_qualification: str, degrees: Sequence[str]) -> int:
        job_level = self.qualification_level(min_qualification)
        if job_level == 0 or not degrees:
            return 100

        candidate_level = max(self.qualification_level(degree) for degree in degrees)
        if candidate_level >= job_level:
            return 100
        if candidate_level == 0:
            return 0
        return percent(candidate_level, job_level)

    def rank_candidates(
        self,
        job: JobPostDescriptor,
        candidates: Sequence[CandidateDescriptor]
    ) -> List[RankedCandidate]:
        """Score every candidate and sort best first; ties keep input order."""
        ranked = [
            RankedCandidate(candidate=candidate, match=self.score(job, candidate))
            for candidate in candidates
        ]
        ranked.sort(key=lambda item: item.match.score, reverse=True)

        self.logger.debug("Candidates ranked", job_id=job.id, candidate_count=len(ranked))
        return ranked

    def rank_jobs(
        self,
        candidate: CandidateDescriptor,
        jobs: Sequence[JobPostDescriptor]
    ) -> List[RankedJob]:
        """Score every job post and sort best first; ties keep input order."""
        ranked = [RankedJob(job=job, match=self.score(job, candidate)) for job in jobs]
        ranked.sort(key=lambda item: item.match.score, reverse=True)

        self.logger.debug("Jobs ranked", candidate_id=candidate.id, job_count=len(ranked))
        return ranked


# Shared engine; it carries no mutable state.
default_engine = MatchingEngine()


def score(job: JobPostDescriptor, candidate: CandidateDescriptor) -> MatchResult:
    return default_engine.score(job, candidate)


def rank_candidates(job: JobPostDescriptor, candidates: Sequence[CandidateDescriptor]) -> List[RankedCandidate]:
    return default_engine.rank_candidates(job, candidates)


def rank_jobs(candidate: CandidateDescriptor, jobs: Sequence[JobPostDescriptor]) -> List[RankedJob]:
    return default_engine.rank_jobs(candidate, jobs)
