from __future__ import annotations

import pytest

from geocaddie.config import reset_settings_cache


def _start(client, **overrides) -> dict:
    body = {"courseId": "test-three", "player": "Ana"}
    body.update(overrides)
    response = client.post("/api/rounds/start", json=body)
    assert response.status_code == 200, response.text
    return response.json()


def test_health_and_metrics(round_client) -> None:
    client, _ = round_client

    health = client.get("/health")
    assert health.status_code == 200
    assert health.json()["status"] == "ok"
    assert health.json()["rounds"] == {"active": 0}

    metrics = client.get("/metrics")
    assert metrics.status_code == 200
    assert "geocaddie_http_requests_total" in metrics.text
    assert 'route="/health"' in metrics.text
    assert "geocaddie_rounds_total" in metrics.text


def test_courses_listing_and_lookup(round_client) -> None:
    client, _ = round_client

    listing = client.get("/api/courses").json()
    assert {"id": "test-three", "name": "Equator Links", "country": "Nowhere", "holeCount": 3, "totalPar": 12} in listing

    course = client.get("/api/courses/test-three").json()
    assert course["holes"][0]["teeBoxes"][0]["id"] == "white"
    assert client.get("/api/courses/nope").status_code == 404


def test_generate_bag(round_client) -> None:
    client, _ = round_client

    response = client.post("/api/bag/generate", json={"handicap": 0})
    assert response.status_code == 200
    clubs = response.json()["clubs"]
    assert len(clubs) == 14
    assert clubs[0] == {
        "name": "Driver",
        "carryDistance": 250.0,
        "lateralErrorStdDev": 15.0,
        "depthErrorStdDev": 10.0,
    }


def test_strategy_endpoint(round_client) -> None:
    client, _ = round_client

    approach = client.post(
        "/api/caddie/strategy", json={"distanceM": 150, "shotNumber": 2}
    ).json()
    assert approach["distance"] == "150m"
    assert approach["advice"]["band"] == "approach"
    assert approach["layup"]["firstClub"]["name"]
    assert approach["layup"]["combinedCarry"] >= 145

    stranded = client.post(
        "/api/caddie/strategy",
        json={"distanceM": 1000, "shotNumber": 2, "handicap": 18, "useYards": True},
    ).json()
    assert stranded["advice"]["band"] == "layup_required"
    assert stranded["layup"] is None
    assert stranded["distance"].endswith("yd")


def test_measure_endpoint(round_client) -> None:
    client, _ = round_client

    body = {
        "ball": {"lat": 0.0, "lng": 0.0},
        "target": {"lat": 0.0, "lng": 0.001},
        "greenCenter": {"lat": 0.0, "lng": 0.002},
    }
    result = client.post("/api/caddie/measure", json=body).json()
    assert result["total"] == pytest.approx(result["toTarget"] + result["targetToGreen"])


def test_round_flow(round_client) -> None:
    client, service = round_client

    started = _start(client)
    round_id = started["id"]
    assert started["phase"] == "in_progress"
    assert started["holeNumber"] == 1
    assert started["ballPosition"] == {"lat": 0.0, "lng": 0.0}

    preview = client.post(f"/api/rounds/{round_id}/preview", json={"club": "7 Iron"})
    assert preview.status_code == 200
    assert preview.json()["strategy"]["band"] == "safe_drive"
    assert preview.json()["distanceToGreen"] == pytest.approx(400.75, abs=0.5)
    assert "targetBearing" in preview.json()

    shot = client.post(
        f"/api/rounds/{round_id}/shots",
        json={"landing": {"lat": 0.0, "lng": 0.001}, "club": "7 Iron"},
    ).json()
    assert (shot["holeNumber"], shot["shotNumber"], shot["clubUsed"]) == (1, 1, "7 Iron")
    assert shot["from"] == {"lat": 0.0, "lng": 0.0}

    extra = client.post(
        f"/api/rounds/{round_id}/shots",
        json={"landing": {"lat": 0.0, "lng": 0.002}, "club": "PW"},
    ).json()
    deleted = client.delete(f"/api/rounds/{round_id}/shots/1/{extra['shotNumber']}")
    assert deleted.status_code == 200
    assert client.delete(f"/api/rounds/{round_id}/shots/1/9").status_code == 400

    suggested = client.get(f"/api/rounds/{round_id}/score/suggested").json()
    assert suggested["strokesTaken"] + suggested["putts"] == 4

    score = client.post(
        f"/api/rounds/{round_id}/score",
        json={"strokesTaken": 4, "putts": 2, "penalties": 0},
    )
    assert score.status_code == 200
    assert score.json()["par"] == 4

    for _ in range(2):
        advanced = client.post(f"/api/rounds/{round_id}/advance")
        assert advanced.status_code == 200
    assert advanced.json()["holeNumber"] == 3
    assert client.post(f"/api/rounds/{round_id}/advance").status_code == 400

    position = client.post(
        f"/api/rounds/{round_id}/position",
        json={"position": {"lat": 0.002, "lng": 0.004}, "startTracking": True},
    ).json()
    assert position["trackedDistance"] == 0.0
    assert client.get(f"/api/rounds/{round_id}").json()["ballPosition"] == {
        "lat": 0.002,
        "lng": 0.004,
    }

    finished = client.post(f"/api/rounds/{round_id}/finish")
    assert finished.status_code == 200
    history = finished.json()
    assert history["courseName"] == "Equator Links"
    assert len(history["scorecard"]) == 1
    assert len(history["shots"]) == 1

    assert service.histories()[0].id == history["id"]
    # closed rounds leave the registry
    assert service.active_count() == 0
    assert client.get(f"/api/rounds/{round_id}").status_code == 404
    assert client.post(f"/api/rounds/{round_id}/finish").status_code == 404


def test_round_error_mapping(round_client) -> None:
    client, _ = round_client

    assert client.get("/api/rounds/missing").status_code == 404
    assert client.post("/api/rounds/start", json={"courseId": "nope"}).status_code == 404
    assert (
        client.post("/api/rounds/start", json={"courseId": "test-three", "startHole": 4}).status_code
        == 400
    )

    round_id = _start(client)["id"]
    assert client.post(f"/api/rounds/{round_id}/finish").status_code == 409
    assert (
        client.post(f"/api/rounds/{round_id}/preview", json={"club": "Chipper"}).status_code
        == 400
    )
    assert (
        client.post(
            f"/api/rounds/{round_id}/score", json={"strokesTaken": 0, "putts": 0}
        ).status_code
        == 400
    )

    abandoned = client.post(f"/api/rounds/{round_id}/abandon").json()
    assert abandoned["phase"] == "abandoned"
    assert (
        client.post(
            f"/api/rounds/{round_id}/shots",
            json={"landing": {"lat": 0.0, "lng": 0.001}, "club": "PW"},
        ).status_code
        == 404
    )


def test_leaderboard_endpoint(round_client) -> None:
    client, _ = round_client

    ana = _start(client, tournamentId="cup")["id"]
    ben = _start(client, player="Ben", tournamentId="cup")["id"]
    client.post(f"/api/rounds/{ana}/score", json={"strokesTaken": 2, "putts": 1})
    client.post(f"/api/rounds/{ben}/score", json={"strokesTaken": 4, "putts": 2})

    board = client.get("/api/rounds/leaderboard", params={"tournamentId": "cup"}).json()
    assert [entry["player"] for entry in board] == ["Ana", "Ben"]
    assert board[0]["totals"]["scoreToPar"] == -1


def test_api_key_required_when_enabled(round_client, monkeypatch: pytest.MonkeyPatch) -> None:
    client, _ = round_client
    monkeypatch.setenv("GEOCADDIE_REQUIRE_API_KEY", "1")
    monkeypatch.setenv("GEOCADDIE_API_KEYS", "alpha, beta")
    reset_settings_cache()

    assert client.get("/api/courses").status_code == 401
    assert client.get("/api/courses", headers={"x-api-key": "gamma"}).status_code == 401
    assert client.get("/api/courses", headers={"x-api-key": "beta"}).status_code == 200
    assert client.get("/health").status_code == 200


def test_abandoned_round_leaves_the_leaderboard(round_client) -> None:
    client, _ = round_client

    ana = _start(client, tournamentId="cup")["id"]
    client.post(f"/api/rounds/{ana}/score", json={"strokesTaken": 0, "putts": 1})
    board = client.get("/api/rounds/leaderboard", params={"tournamentId": "cup"}).json()
    assert [entry["player"] for entry in board] == ["Ana"]

    client.post(f"/api/rounds/{ana}/abandon")
    assert client.get("/api/rounds/leaderboard", params={"tournamentId": "cup"}).json() == []


def test_api_key_never_becomes_the_player_name(
    round_client, monkeypatch: pytest.MonkeyPatch
) -> None:
    client, service = round_client
    monkeypatch.setenv("GEOCADDIE_REQUIRE_API_KEY", "1")
    monkeypatch.setenv("GEOCADDIE_API_KEYS", "secret-ana,secret-ben")
    reset_settings_cache()

    started = client.post(
        "/api/rounds/start",
        json={"courseId": "test-three", "tournamentId": "cup"},
        headers={"x-api-key": "secret-ana"},
    )
    assert started.status_code == 200
    assert started.json()["player"] == "Guest"

    round_id = started.json()["id"]
    client.post(
        f"/api/rounds/{round_id}/score",
        json={"strokesTaken": 3, "putts": 2},
        headers={"x-api-key": "secret-ana"},
    )
    board = client.get(
        "/api/rounds/leaderboard",
        params={"tournamentId": "cup"},
        headers={"x-api-key": "secret-ben"},
    )
    assert board.status_code == 200
    assert "secret-ana" not in board.text
    assert [entry["player"] for entry in board.json()] == ["Guest"]
    assert all(h.player != "secret-ana" for h in service.live_scorecards())
