from unittest.mock import AsyncMock

from fastapi.testclient import TestClient

from inspire.engine.recency import RecencyCache
from inspire.engine.safety import default_safety_list
from inspire.llm import CandidateGenerator
from inspire.main import app
from inspire.orchestrator import FallbackLadder
from inspire.settings import Settings


def _sample_payload() -> dict:
    return {
        "origin": "London (LON)",
        "preferences": {
            "flight_time_hours": 4,
            "duration": "mini-4d",
            "group": "couple",
            "interests": ["Food & drink", "Beaches"],
            "season": "spring",
        },
        "exclude": ["Paris"],
    }


def test_api_inspire_delegates_payload(monkeypatch):
    client = TestClient(app)
    orchestrator = AsyncMock(return_value={"meta": {"mode": "live"}, "top5": []})
    monkeypatch.setattr("inspire.main.orchestrate_inspire", orchestrator)

    response = client.post("/api/inspire", json=_sample_payload())

    assert response.status_code == 200
    orchestrator.assert_awaited_once()
    assert orchestrator.await_args.args[0] == _sample_payload()
    assert response.json() == {"meta": {"mode": "live"}, "top5": []}


def test_api_inspire_treats_bad_bodies_as_empty(monkeypatch):
    client = TestClient(app)
    orchestrator = AsyncMock(return_value={"meta": {"mode": "sample"}, "top5": []})
    monkeypatch.setattr("inspire.main.orchestrate_inspire", orchestrator)

    not_json = client.post("/api/inspire", content="{oops", headers={"content-type": "application/json"})
    a_list = client.post("/api/inspire", json=[1, 2, 3])

    assert not_json.status_code == 200
    assert a_list.status_code == 200
    assert [call.args[0] for call in orchestrator.await_args_list] == [{}, {}]


def test_api_inspire_rejects_get():
    client = TestClient(app)
    response = client.get("/api/inspire")
    assert response.status_code == 405
    assert response.headers["allow"] == "POST"


def test_api_inspire_end_to_end_without_generator(monkeypatch):
    ladder = FallbackLadder(
        CandidateGenerator(api_key=None),
        settings=Settings(),
        safety=default_safety_list(),
        recency=RecencyCache(30),
    )
    monkeypatch.setattr("inspire.orchestrator.get_ladder", lambda: ladder)
    client = TestClient(app)

    response = client.post("/api/inspire", json=_sample_payload())

    assert response.status_code == 200
    body = response.json()
    assert body["meta"]["mode"] == "sample"
    assert len(body["top5"]) == 5
    assert "Paris" not in {item["city"] for item in body["top5"]}
    assert all(len(item["highlights"]) == 3 for item in body["top5"])


def test_healthz_reports_generator_and_recency(monkeypatch):
    recency = RecencyCache(30)
    recency.add(("lisbon", "portugal"))
    ladder = FallbackLadder(
        CandidateGenerator(api_key=None),
        settings=Settings(),
        safety=default_safety_list(),
        recency=recency,
    )
    monkeypatch.setattr("inspire.main.get_ladder", lambda: ladder)
    client = TestClient(app)

    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "generator": "disabled", "recency_size": 1}
