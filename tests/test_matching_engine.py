"""Tests for the matching engine sub-factors and ranking."""

import pytest

from jobboard_engine.core.models import (
    CandidateDescriptor,
    ExperienceEntry,
    JobPostDescriptor,
    QualificationEntry,
)
from jobboard_engine.matching import MatchingEngine, rank_candidates, rank_jobs, score


@pytest.fixture
def engine():
    return MatchingEngine()


def make_candidate(id=1, **kwargs):
    kwargs.setdefault("profile_status", "verified")
    return CandidateDescriptor(id=id, **kwargs)


class TestSkillsScore:

    def test_partial_skill_coverage(self, engine):
        job = JobPostDescriptor(id=1, skills={"React", "Node"})
        candidate = make_candidate(skills={"react.js"})

        assert score(job, candidate).factors.skills_score == 50

    def test_substring_match_works_both_ways(self, engine):
        assert engine.skills_score(["Machine Learning"], ["learning"]) == 100
        assert engine.skills_score(["SQL"], ["PostgreSQL"]) == 100

    def test_match_is_case_insensitive(self, engine):
        assert engine.skills_score(["PYTHON"], ["python"]) == 100

    def test_no_required_skills(self, engine):
        assert engine.skills_score([], []) == 100

    def test_candidate_without_skills(self, engine):
        assert engine.skills_score(["Go", "Rust"], []) == 0

    def test_halves_round_up(self, engine):
        required = ["a1", "b2", "c3", "d4", "e5", "f6", "g7", "h8"]
        assert engine.skills_score(required, ["a1"]) == 13


class TestExperienceScore:

    def test_proportional_experience(self, engine):
        job = JobPostDescriptor(id=1, experience_required="5+ years")
        candidate = make_candidate(experience=[ExperienceEntry(duration="3 years")])

        assert score(job, candidate).factors.experience_score == 60

    def test_durations_are_summed(self):
        candidate = make_candidate(experience=[
            {"company": "A", "duration": "2 years"},
            {"company": "B", "duration": 3},
            {"company": "C", "duration": "a few months"},
        ])
        assert candidate.total_years == 5

    @pytest.mark.parametrize("required,years,expected", [
        (0, 0, 100),
        (5, 7, 100),
        (5, 5, 100),
        (5, 0, 0),
        (3, 2, 67),
    ])
    def test_experience_cases(self, engine, required, years, expected):
        assert engine.experience_score(required, years) == expected

    def test_unparseable_requirement_reads_as_zero(self):
        assert JobPostDescriptor(id=1, experience_required="fresher").required_years == 0


class TestSalaryScore:

    def test_inside_range(self, engine):
        assert engine.salary_score((1_000_000, 2_000_000), 1_500_000) == 100
        assert engine.salary_score((1_000_000, 2_000_000), 2_000_000) == 100

    def test_above_range(self, engine):
        assert engine.salary_score((1_000_000, 2_000_000), 2_500_000) == 60

    def test_below_range(self, engine):
        assert engine.salary_score((1_000_000, 2_000_000), 500_000) == 33

    def test_far_outside_range_floors_at_zero(self, engine):
        assert engine.salary_score((0, 0), 500_000) == 0

    def test_missing_inputs(self, engine):
        assert engine.salary_score(None, 500_000) == 100
        assert engine.salary_score((1_000_000, 2_000_000), 0) == 100

    def test_range_is_read_in_lakhs(self):
        job = JobPostDescriptor(id=1, salary_range="12 - 18 LPA")
        assert job.salary_bounds == (1_200_000, 1_800_000)
        assert JobPostDescriptor(id=2, salary_range="15").salary_bounds == (1_500_000, 1_500_000)
        assert JobPostDescriptor(id=3, salary_range="negotiable").salary_bounds is None


class TestLocationScore:

    @pytest.mark.parametrize("job_location,address,expected", [
        ("Pune", "Kothrud, Pune, Maharashtra", 100),
        ("", "Anywhere", 100),
        ("Delhi", "", 100),
        ("Bangalore", "Bengaluru, KA", 80),
        ("Mumbai", "Bombay", 80),
        ("Mumbai", "Delhi", 50),
        ("Remote", "Chennai", 50),
    ])
    def test_location_cases(self, engine, job_location, address, expected):
        assert engine.location_score(job_location, address) == expected


class TestQualificationScore:

    @pytest.mark.parametrize("text,level", [
        ("Ph.D in Computer Science", 4),
        ("MBA", 3),
        ("M.Tech", 3),
        ("ME Mechanical", 3),
        ("B.Tech", 2),
        ("Bachelor of Commerce", 2),
        ("B.Com", 2),
        ("BBA", 2),
        ("BArch", 2),
        ("B.Arch", 2),
        ("BDS", 2),
        ("LLB", 2),
        ("B.Pharm", 2),
        ("B.Ed", 2),
        ("M.Com", 3),
        ("MPhil Economics", 3),
        ("LLM", 3),
        ("Diploma in Electronics", 1),
        ("High School", 0),
        ("", 0),
    ])
    def test_qualification_levels(self, engine, text, level):
        assert engine.qualification_level(text) == level

    def test_business_bachelor_meets_bachelor_requirement(self, engine):
        assert engine.qualification_score("Bachelor's degree", ["BBA"]) == 100
        assert engine.qualification_score("Bachelor's degree", ["BArch"]) == 100

    def test_lower_degree_scores_proportionally(self, engine):
        assert engine.qualification_score("Master's degree", ["B.Tech"]) == 67

    def test_best_degree_counts(self, engine):
        assert engine.qualification_score("Bachelor", ["Diploma", "MSc"]) == 100

    def test_unrecognised_degree_scores_zero(self, engine):
        assert engine.qualification_score("Bachelor", ["High School"]) == 0

    def test_missing_inputs(self, engine):
        assert engine.qualification_score("", ["B.Tech"]) == 100
        assert engine.qualification_score("Bachelor", []) == 100


class TestWeightedScore:

    def test_weighted_total(self):
        job = JobPostDescriptor(
            id=1,
            skills=["React", "Node"],
            experience_required="5+ years",
            salary_range="10-20",
            location="Pune",
            min_qualification="Bachelor",
        )
        candidate = make_candidate(
            skills=["react.js"],
            experience=[{"duration": "3 years"}],
            expected_salary=1_500_000,
            address="Pune",
            qualifications=[QualificationEntry(degree="B.Tech")],
        )

        result = score(job, candidate)

        assert result.factors.model_dump() == {
            "skills_score": 50,
            "experience_score": 60,
            "salary_score": 100,
            "location_score": 100,
            "qualification_score": 100,
        }
        assert result.score == 72


class TestRanking:

    def test_empty_pool(self):
        job = JobPostDescriptor(id=1, skills=["Python"])
        assert rank_candidates(job, []) == []
        assert rank_jobs(make_candidate(), []) == []

    def test_best_first_with_stable_ties(self):
        job = JobPostDescriptor(id=1, skills=["Python", "SQL"])
        candidates = [
            make_candidate(id="a", skills=["Python"]),
            make_candidate(id="b", skills=["Python", "SQL"]),
            make_candidate(id="c", skills=["SQL"]),
        ]

        ranked = rank_candidates(job, candidates)

        assert [item.candidate.id for item in ranked] == ["b", "a", "c"]
        assert [item.score for item in ranked] == [100, 80, 80]

    def test_rank_jobs_for_candidate(self):
        candidate = make_candidate(skills=["Python"])
        jobs = [
            JobPostDescriptor(id=1, skills=["Java"]),
            JobPostDescriptor(id=2, skills=["Python"]),
        ]

        ranked = rank_jobs(candidate, jobs)

        assert [item.job.id for item in ranked] == [2, 1]
