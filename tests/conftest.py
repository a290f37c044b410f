"""Shared fixtures: sample project exports and a clean environment."""

import json
from pathlib import Path

import pytest

SAMPLE_PROJECT = {
    "hypotheses": [
        {
            "id": "H1",
            "title": "Teams lose track of experiments",
            "assumption": "Spreadsheets get out of date",
            "status": "confirmed",
            "impact": 5,
            "uncertainty": 4,
            "created_at": "2024-01-01T09:00:00Z",
            "roadmap_tag": "roadmap",
            "roadmap_order": 1,
        },
        {
            "id": "H2",
            "title": "Managers want a progress view",
            "status": "検証中",
            "impact": 4,
            "uncertainty": 4,
            "created_at": "2024-01-02T09:00:00Z",
            "roadmap_tag": "roadmap",
            "roadmap_order": 2,
        },
        {
            "id": "H3",
            "title": "Teams will pay for it",
            "status": "unverified",
            "impact": 5,
            "uncertainty": 5,
            "created_at": "2024-01-03T09:00:00Z",
            "roadmap_tag": "roadmap",
            "roadmap_order": 3,
        },
        {
            "id": "H4",
            "title": "Side idea",
            "impact": 2,
            "uncertainty": 1,
        },
    ],
    "links": [
        {"id": "L1", "from_id": "H1", "to_id": "H2", "label": "enables"},
        {"id": "L2", "from_id": "H2", "to_id": "H3"},
        {"id": "L3", "from_id": "H1", "to_id": "DELETED"},
    ],
    "validations": [
        {"id": "V1", "hypothesis_id": "H1", "result": "interviews: 8/10"},
        {"id": "V2", "hypothesis_id": "H2"},
    ],
}


@pytest.fixture(autouse=True)
def clean_hyptrack_env(monkeypatch):
    """Remove HYPTRACK_* variables so host settings never leak into tests."""
    import os

    for name in list(os.environ):
        if name.startswith("HYPTRACK_"):
            monkeypatch.delenv(name)


@pytest.fixture
def sample_project() -> dict:
    """A small project export as a dict (deep copy per test)."""
    return json.loads(json.dumps(SAMPLE_PROJECT))


@pytest.fixture
def sample_project_file(tmp_path: Path, sample_project: dict) -> Path:
    """The sample project written to project.json in tmp_path."""
    path = tmp_path / "project.json"
    path.write_text(json.dumps(sample_project, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def write_project(tmp_path: Path):
    """Write an arbitrary project dict to a JSON file and return its path."""

    def _write(data: dict, name: str = "project.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return path

    return _write
