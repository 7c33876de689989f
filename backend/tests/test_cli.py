"""Tests for the skillmap command-line entry point."""

import json

import pytest

from cli import USER_ERROR_MESSAGE, main
from config import settings
from services.providers.registry import register_provider


@pytest.fixture
def skills_file(tmp_path):
    path = tmp_path / "skills.json"
    path.write_text(json.dumps(["React", "Python", "AWS", "React Native"]), encoding="utf-8")
    return str(path)


@pytest.fixture
def jobs_file(tmp_path):
    jobs = [
        {"id": "platform", "title": "Platform Engineer", "required_skills": ["Kubernetes", "AWS"]},
        {"id": "web", "title": "Frontend Engineer", "required_skills": ["React"], "nice_to_have_skills": ["GraphQL"]},
        {"id": "infra", "title": "Infra Engineer", "required_skills": ["Kubernetes", "Terraform"]},
    ]
    path = tmp_path / "jobs.json"
    path.write_text(json.dumps(jobs), encoding="utf-8")
    return str(path)


def test_cluster_lexical(skills_file, capsys):
    assert main(["cluster", skills_file, "--clusters", "2"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert [n["label"] for n in payload["nodes"]] == ["React", "Python", "AWS", "React Native"]
    assert len(payload["positions"]) == 4
    assert payload["metadata"]["method"] == "lexical"


def test_cluster_semantic(skills_file, fake_provider, capsys):
    register_provider(settings.embedding_provider, fake_provider)
    assert main(["cluster", skills_file, "--method", "semantic"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["metadata"]["method"] == "semantic"
    assert len(fake_provider.calls) == 1


def test_provider_failure_reports_generic_message(skills_file, failing_provider, capsys):
    register_provider(settings.embedding_provider, failing_provider(1))
    assert main(["cluster", skills_file, "--method", "semantic"]) == 1
    captured = capsys.readouterr()
    assert USER_ERROR_MESSAGE in captured.err
    assert captured.out == ""


def test_rank(skills_file, jobs_file, capsys):
    assert main(["rank", skills_file, jobs_file]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload[0]["id"] == "web"
    assert payload[0]["missing_nice_to_have"] == ["GraphQL"]
    assert payload[-1]["id"] == "infra"
    assert payload[-1]["missing_required"] == ["Kubernetes", "Terraform"]


def test_recommend(skills_file, jobs_file, capsys):
    assert main(["recommend", skills_file, jobs_file, "--max", "2"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert [r["skill"] for r in payload] == ["kubernetes", "graphql"]
    assert payload[0]["priority"] == "high"


def test_unknown_command_exits():
    with pytest.raises(SystemExit):
        main(["explode"])
