"""Property-based tests for the matching engine."""

from hypothesis import given, strategies as st, settings

from jobboard_engine.core.models import (
    CandidateDescriptor,
    ExperienceEntry,
    JobPostDescriptor,
    QualificationEntry,
)
from jobboard_engine.matching.engine import MatchingEngine


SKILLS = [
    "Python", "JavaScript", "React", "Node.js", "SQL", "MongoDB",
    "AWS", "Docker", "Kubernetes", "Machine Learning", "Go", "Java"
]
LOCATIONS = ["Bangalore", "Bengaluru, KA", "Mumbai", "Bombay", "Delhi", "Pune", "Remote", ""]
DEGREES = ["PhD Physics", "MBA", "M.Tech", "B.Tech", "BSc", "Diploma", "High School", ""]


@st.composite
def job_strategy(draw):
    """Generate job posts with realistic free-text fields."""
    low = draw(st.integers(min_value=0, max_value=40))
    high = draw(st.integers(min_value=low, max_value=60))
    return JobPostDescriptor(
        id=draw(st.integers(min_value=1, max_value=10_000)),
        title="Engineer",
        status="ACTIVE",
        skills=draw(st.lists(st.sampled_from(SKILLS), max_size=6)),
        experience_required=draw(st.sampled_from(["", "2 years", "5+ years", "10 yrs", "fresher"])),
        salary_range=draw(st.sampled_from(["", f"{low}-{high}", f"{high}"])),
        location=draw(st.sampled_from(LOCATIONS)),
        min_qualification=draw(st.sampled_from(DEGREES)),
    )


@st.composite
def experience_strategy(draw):
    return ExperienceEntry(
        company=draw(st.text(max_size=10)),
        position="Developer",
        duration=draw(st.one_of(
            st.integers(min_value=0, max_value=15),
            st.sampled_from(["3 years", "6 months", "1 yr", "", "two years"]),
        )),
    )


@st.composite
def candidate_strategy(draw):
    """Generate candidate profiles."""
    return CandidateDescriptor(
        id=draw(st.integers(min_value=1, max_value=10_000)),
        skills=draw(st.lists(st.sampled_from(SKILLS + ["react.js", "node"]), max_size=8)),
        experience=draw(st.lists(experience_strategy(), max_size=4)),
        expected_salary=draw(st.integers(min_value=0, max_value=8_000_000)),
        address=draw(st.sampled_from(LOCATIONS)),
        qualifications=[QualificationEntry(degree=d) for d in draw(st.lists(st.sampled_from(DEGREES), max_size=3))],
        profile_status="verified",
    )


class TestMatchingEngineProperties:
    """Property-based tests for scoring."""

    def setup_method(self):
        self.engine = MatchingEngine()

    @given(job=job_strategy(), candidate=candidate_strategy())
    @settings(max_examples=100)
    def test_scores_are_bounded(self, job, candidate):
        """
        Property 1: Bounded Scores

        The total and every sub-factor lie within 0..100.
        """
        result = self.engine.score(job, candidate)

        assert 0 <= result.score <= 100
        for value in result.factors.model_dump().values():
            assert 0 <= value <= 100

    @given(job=job_strategy(), candidate=candidate_strategy())
    def test_scoring_is_deterministic(self, job, candidate):
        """
        Property 2: Determinism

        Scoring the same pair twice gives identical results.
        """
        assert self.engine.score(job, candidate) == self.engine.score(job, candidate)

    @given(job=job_strategy(), candidate=candidate_strategy(), data=st.data())
    def test_input_order_does_not_matter(self, job, candidate, data):
        """
        Property 3: Order Invariance

        Reordering skills, work history or qualifications leaves the score unchanged.
        """
        shuffled = CandidateDescriptor(
            id=candidate.id,
            skills=data.draw(st.permutations(sorted(candidate.skills))),
            experience=data.draw(st.permutations(candidate.experience)),
            expected_salary=candidate.expected_salary,
            address=candidate.address,
            qualifications=data.draw(st.permutations(candidate.qualifications)),
            profile_status=candidate.profile_status,
        )

        assert self.engine.score(job, shuffled) == self.engine.score(job, candidate)

    @given(job=job_strategy(), candidate=candidate_strategy())
    def test_job_without_skills_scores_full_skills(self, job, candidate):
        """
        Property 4: No Required Skills

        A job listing no skills gives every candidate full skill marks.
        """
        job = job.model_copy(update={"skills": frozenset()})
        assert self.engine.score(job, candidate).factors.skills_score == 100

    @given(job=job_strategy(), candidate=candidate_strategy())
    def test_unspecified_salary_scores_full(self, job, candidate):
        """
        Property 5: Unspecified Salary

        A candidate with no salary expectation never loses salary marks.
        """
        candidate = candidate.model_copy(update={"expected_salary": 0})
        assert self.engine.score(job, candidate).factors.salary_score == 100

    @given(job=job_strategy(), candidate=candidate_strategy())
    def test_total_is_weighted_mean(self, job, candidate):
        """
        Property 6: Weighted Total

        The total sits between the lowest and highest sub-factor.
        """
        result = self.engine.score(job, candidate)
        values = list(result.factors.model_dump().values())

        assert min(values) <= result.score <= max(values)

    @given(job=job_strategy(), candidates=st.lists(candidate_strategy(), max_size=8))
    def test_ranking_is_sorted_and_complete(self, job, candidates):
        """
        Property 7: Ranking Order

        Ranking keeps every candidate and orders scores best first.
        """
        ranked = self.engine.rank_candidates(job, candidates)
        scores = [item.score for item in ranked]

        assert len(ranked) == len(candidates)
        assert scores == sorted(scores, reverse=True)
