"""
Tests for the click CLI (database and gateway replaced).
"""

import json

import pytest
from click.testing import CliRunner

import pipeline.main as cli
from extractor import RequirementExtractor
from pipeline import MatchingService

from conftest import MemoryStore


class FakeDatabase(MemoryStore):
    instances: list["FakeDatabase"] = []

    def __init__(self):
        super().__init__()
        self.connected = False
        self.indexes_created = False
        FakeDatabase.instances.append(self)

    async def connect(self):
        self.connected = True

    async def disconnect(self):
        self.connected = False

    async def ensure_indexes(self):
        self.indexes_created = True


@pytest.fixture
def runner(monkeypatch, failing_gateway):
    """CLI runner sharing one in-memory store across invocations."""
    shared = FakeDatabase()
    FakeDatabase.instances = [shared]
    # Keep log lines out of the captured output, which must stay valid JSON
    monkeypatch.setattr(cli, "setup_logging", lambda **kwargs: None)
    monkeypatch.setattr(cli, "Database", lambda: shared)
    monkeypatch.setattr(
        cli,
        "MatchingService",
        lambda store: MatchingService(store, extractor=RequirementExtractor(failing_gateway)),
    )
    return CliRunner()


@pytest.fixture
def job_file(tmp_path):
    path = tmp_path / "job.yaml"
    path.write_text(
        "job_id: job-1\n"
        "description: Java, Docker and Kubernetes\n"
        "hidden_requirements: Python scripting for internal tooling\n"
    )
    return path


@pytest.fixture
def candidate_file(tmp_path):
    path = tmp_path / "candidate.yaml"
    path.write_text("candidate_id: ada\nexperience_years: 3\nskills: [Java, Python]\n")
    return path


class TestCli:
    def test_init_db(self, runner):
        result = runner.invoke(cli.main, ["init-db"])

        assert result.exit_code == 0
        assert FakeDatabase.instances[0].indexes_created
        assert not FakeDatabase.instances[0].connected

    def test_analyze_match_show(self, runner, job_file, candidate_file):
        analyzed = runner.invoke(cli.main, ["analyze-job", str(job_file)])
        assert analyzed.exit_code == 0, analyzed.output
        requirements = json.loads(analyzed.output)
        assert [s["skill_name"] for s in requirements["hidden_skills"]] == ["Python"]

        matched = runner.invoke(
            cli.main, ["match", str(candidate_file), "--job-id", "job-1"]
        )
        assert matched.exit_code == 0, matched.output
        operator = json.loads(matched.output)
        assert operator["extraction_method"] == "fallback"
        assert operator["scoring_breakdown"]["hidden_criteria_score"] == 100

        shown = runner.invoke(
            cli.main, ["show", "-c", "ada", "-j", "job-1", "--role", "candidate"]
        )
        assert shown.exit_code == 0, shown.output
        view = json.loads(shown.output)
        assert "overall_score" not in view
        assert "hidden_match_analysis" not in view
        assert [m["skill_name"] for m in view["matched_skills"]] == ["Java"]

    def test_match_before_analysis_fails(self, runner, candidate_file):
        result = runner.invoke(cli.main, ["match", str(candidate_file), "--job-id", "job-9"])

        assert result.exit_code != 0
        assert "not been analyzed" in result.output

    def test_show_missing(self, runner):
        result = runner.invoke(cli.main, ["show", "-c", "x", "-j", "y"])

        assert result.exit_code != 0

    def test_rank_and_stats(self, runner, scored_result):
        store = FakeDatabase.instances[0]
        for score, candidate in ((60, "b"), (90, "a")):
            store.match_results[(candidate, "job-1")] = scored_result(score, candidate_id=candidate)

        ranked = runner.invoke(cli.main, ["rank", "job-1"])
        stats = runner.invoke(cli.main, ["stats", "job-1"])
        top = runner.invoke(cli.main, ["rank", "job-1", "--top", "1"])

        assert [r["candidate_id"] for r in json.loads(ranked.output)] == ["a", "b"]
        assert json.loads(stats.output)["total"] == 2
        assert [r["candidate_id"] for r in json.loads(top.output)] == ["a"]

    def test_show_job_by_role(self, runner, job_file):
        runner.invoke(cli.main, ["analyze-job", str(job_file)])

        candidate = runner.invoke(cli.main, ["show-job", "job-1"])
        operator = runner.invoke(cli.main, ["show-job", "job-1", "--role", "admin"])

        assert candidate.exit_code == 0, candidate.output
        assert set(json.loads(candidate.output)) == {"job_id", "normal_skills"}
        assert [s["skill_name"] for s in json.loads(operator.output)["hidden_skills"]] == ["Python"]
        assert runner.invoke(cli.main, ["show-job", "job-9"]).exit_code != 0

    def test_matches_and_delete(self, runner, make_result):
        store = FakeDatabase.instances[0]
        for job_id in ("job-1", "job-2"):
            store.match_results[("ada", job_id)] = make_result(
                candidate_id="ada", job_id=job_id, technical=100, hidden=100
            )

        listed = runner.invoke(cli.main, ["matches", "ada"])
        deleted = runner.invoke(cli.main, ["delete", "-c", "ada", "-j", "job-1"])
        again = runner.invoke(cli.main, ["delete", "-c", "ada", "-j", "job-1"])

        views = json.loads(listed.output)
        assert [v["job_id"] for v in views] == ["job-1", "job-2"]
        assert all("overall_score" not in v for v in views)
        assert deleted.exit_code == 0
        assert list(store.match_results) == [("ada", "job-2")]
        assert again.exit_code != 0

    def test_invalid_job_file_is_reported(self, runner, tmp_path):
        path = tmp_path / "job.yaml"
        path.write_text("- not\n- a mapping\n")

        result = runner.invoke(cli.main, ["analyze-job", str(path)])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Expected a mapping" in result.output

    def test_invalid_candidate_file_is_reported(self, runner, tmp_path):
        path = tmp_path / "candidate.yaml"
        path.write_text("candidate_id: ada\nexperience_years: lots\nskills: [Java]\n")

        result = runner.invoke(cli.main, ["match", str(path), "--job-id", "job-1"])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Invalid candidate profile" in result.output
