"""Tests for the command-line interface."""

import json

from typer.testing import CliRunner

from jobboard_engine.cli import app

runner = CliRunner()


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestCli:

    def test_can_perform_allowed(self):
        result = runner.invoke(app, ["can-perform", "admin", "PENDING", "activate"])

        assert result.exit_code == 0
        assert "admin activate on PENDING: allowed" in result.output
        assert "activate" in result.output.split("Allowed actions:")[1]

    def test_can_perform_refused(self):
        result = runner.invoke(app, ["can-perform", "employer", "ON_HOLD", "activate"])

        assert result.exit_code == 0
        assert "refused" in result.output

    def test_can_perform_unknown_role(self):
        result = runner.invoke(app, ["can-perform", "candidate", "ACTIVE", "edit"])
        assert result.exit_code == 2

    def test_transition_check(self):
        legal = runner.invoke(app, ["transition-check", "ACTIVE", "FULFILLED"])
        illegal = runner.invoke(app, ["transition-check", "FULFILLED", "ACTIVE"])

        assert "legal" in legal.output and "illegal" not in legal.output
        assert "illegal" in illegal.output

    def test_score(self, tmp_path):
        job = write_json(tmp_path / "job.json", {"id": 1, "skills": ["React", "Node"]})
        candidate = write_json(tmp_path / "candidate.json", {"id": 2, "skills": ["react.js"]})

        result = runner.invoke(app, ["score", job, candidate])

        assert result.exit_code == 0
        assert "skills_score" in result.output
        assert "80" in result.output

    def test_rank_with_no_eligible_candidates(self, tmp_path):
        job = write_json(tmp_path / "job.json", {"id": 1, "status": "ACTIVE"})
        candidates = write_json(tmp_path / "candidates.json", [{"id": 2, "profile_status": "pending"}])

        result = runner.invoke(app, ["rank", job, candidates])

        assert result.exit_code == 0
        assert "No eligible candidates" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["score", str(tmp_path / "nope.json"), str(tmp_path / "nope.json")])
        assert result.exit_code == 1

    def test_invalid_descriptor(self, tmp_path):
        job = write_json(tmp_path / "job.json", {"id": 1, "status": "ARCHIVED"})
        candidate = write_json(tmp_path / "candidate.json", {"id": 2})

        result = runner.invoke(app, ["score", job, candidate])

        assert result.exit_code == 1
        assert "Invalid JobPostDescriptor" in result.output

    def test_invalid_candidate_in_list(self, tmp_path):
        job = write_json(tmp_path / "job.json", {"id": 1, "status": "ACTIVE"})
        candidates = write_json(tmp_path / "candidates.json", [{"id": 2, "expected_salary": -5}])

        result = runner.invoke(app, ["rank", job, candidates])

        assert result.exit_code == 1
        assert "Invalid CandidateDescriptor" in result.output

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert "Job Board Engine v0.1.0" in result.output
