"""HTTP tests for the analytics and log lifecycle endpoints."""

import pytest

AS_OF = "2026-10-18"


def _drink(i: int, day: str, amount: int, hour: int = 9, active: bool = False) -> dict:
    ts = f"{day}T{hour:02d}:00:00"
    return {"id": f"d{i}", "amount": amount, "label": "Glass", "logged_at": ts, "completed_at": None if active else ts}


def _night(i: int, day: str, **kw) -> dict:
    data = {
        "id": f"s{i}",
        "date": day,
        "lights_out": "23:00",
        "wake_up": "06:45",
        "out_of_bed": "07:00",
        "latency": 15,
        "awakenings": 0,
        "awake_duration": 0,
        "subjective_quality": 8,
    }
    data.update(kw)
    return data


@pytest.mark.asyncio
async def test_health(client):
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_sleep_stats_for_one_night(client):
    r = await client.post("/api/v1/sleep/stats", json={"entry": _night(1, AS_OF), "settings": {"target_hours": 8}})
    assert r.status_code == 200
    data = r.json()
    assert data["total_time_in_bed"] == 480
    assert data["total_sleep_time"] == 465
    assert data["sleep_quality_score"] == pytest.approx(90.75)


@pytest.mark.asyncio
async def test_sleep_stats_rejects_bad_clock_time(client):
    r = await client.post("/api/v1/sleep/stats", json={"entry": _night(1, AS_OF, lights_out="24:10")})
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_sleep_consistency_with_single_log(client):
    r = await client.post(
        f"/api/v1/analytics/sleep/consistency?days=7&as_of={AS_OF}",
        json={"logs": [_night(1, "2026-10-17")]},
    )
    assert r.status_code == 200
    assert r.json() == {"score": 100, "variance": 0, "std_dev": 0}


@pytest.mark.asyncio
async def test_sleep_summary(client):
    logs = [_night(1, "2026-10-17"), _night(2, "2026-10-16", subjective_quality=6)]
    r = await client.post(f"/api/v1/analytics/sleep/summary?as_of={AS_OF}", json={"logs": logs})
    assert r.status_code == 200
    data = r.json()
    assert data["latest"]["sleep_quality_score"] == pytest.approx(90.75)
    assert data["previous"]["sleep_quality_score"] == pytest.approx(82.75)
    assert data["period"]["logs_count"] == 2
    assert data["weekday_vs_weekend"]["weekend_count"] == 1


@pytest.mark.asyncio
async def test_sleep_bedtime_quality(client):
    logs = [_night(1, "2026-10-17", lights_out="15:30"), _night(2, "2026-10-16", lights_out="22:15")]
    r = await client.post(f"/api/v1/analytics/sleep/bedtime-quality?as_of={AS_OF}", json={"logs": logs})
    assert r.status_code == 200
    buckets = r.json()["buckets"]
    assert sum(b["count"] for b in buckets) == 1
    assert buckets[2]["average"] == 8


@pytest.mark.asyncio
async def test_hydration_streaks(client):
    logs = [
        _drink(1, "2026-10-18", 2500),
        _drink(2, "2026-10-17", 2100),
        _drink(3, "2026-10-16", 1800),
        _drink(4, "2026-10-15", 2200),
    ]
    r = await client.post(
        f"/api/v1/analytics/hydration/streaks?as_of={AS_OF}",
        json={"logs": logs, "settings": {"daily_goal": 2000}},
    )
    assert r.status_code == 200
    assert r.json() == {"current_streak": 2, "longest_streak": 2}


@pytest.mark.asyncio
async def test_hydration_trend_has_one_point_per_day(client):
    r = await client.post(f"/api/v1/analytics/hydration/trend?days=7&as_of={AS_OF}", json={"logs": []})
    assert r.status_code == 200
    trend = r.json()
    assert len(trend) == 7
    assert trend[0]["date"] == "2026-10-12"
    assert trend[-1]["date"] == AS_OF


@pytest.mark.asyncio
async def test_hydration_today_accepts_legacy_presets(client):
    body = {
        "logs": [_drink(1, AS_OF, 500), _drink(2, AS_OF, 250, hour=11, active=True)],
        "settings": {"daily_goal": 2000, "presets": [250, 500]},
    }
    r = await client.post(f"/api/v1/analytics/hydration/today?as_of={AS_OF}", json=body)
    assert r.status_code == 200
    data = r.json()
    assert data["intake"] == 500
    assert data["progress"] == 25
    assert [d["id"] for d in data["active"]] == ["d2"]
    assert data["presets"] == [{"amount": 250}, {"amount": 500}]
    assert len(data["last_7_days"]) == 7


@pytest.mark.asyncio
async def test_hydration_hourly_tie(client):
    logs = [_drink(1, AS_OF, 400, hour=15), _drink(2, "2026-10-17", 400, hour=7)]
    r = await client.post(f"/api/v1/analytics/hydration/hourly?as_of={AS_OF}", json={"logs": logs})
    assert r.status_code == 200
    assert r.json()["peak_hour"] == 7


@pytest.mark.asyncio
async def test_unknown_timezone_rejected(client):
    r = await client.post("/api/v1/analytics/hydration/stats?tz=Mars/Olympus", json={"logs": []})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_days_out_of_range_rejected(client):
    r = await client.post("/api/v1/analytics/hydration/stats?days=0", json={"logs": []})
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_drink_lifecycle(client):
    r = await client.post("/api/v1/hydration/logs/start", json={"logs": [], "amount": 500, "label": "Bottle"})
    assert r.status_code == 200
    started = r.json()
    assert started["entry"]["completed_at"] is None
    entry_id = started["entry"]["id"]

    r = await client.post(f"/api/v1/hydration/logs/{entry_id}/finish", json={"logs": started["logs"]})
    assert r.status_code == 200
    finished = r.json()
    assert finished["entry"]["completed_at"] is not None

    r = await client.post(f"/api/v1/hydration/logs/{entry_id}/finish", json={"logs": finished["logs"]})
    assert r.status_code == 409

    r = await client.post(f"/api/v1/hydration/logs/{entry_id}/delete", json={"logs": finished["logs"]})
    assert r.status_code == 200
    assert r.json() == {"logs": []}


@pytest.mark.asyncio
async def test_hydration_mixed_timestamp_offsets(client):
    logs = [
        {"id": "d1", "amount": 200, "logged_at": f"{AS_OF}T08:00:00", "completed_at": f"{AS_OF}T08:00:00"},
        {"id": "d2", "amount": 300, "logged_at": f"{AS_OF}T09:00:00Z", "completed_at": f"{AS_OF}T09:05:00Z"},
    ]
    r = await client.post(f"/api/v1/analytics/hydration/today?as_of={AS_OF}&tz=UTC", json={"logs": logs})
    assert r.status_code == 200
    assert [d["id"] for d in r.json()["logs"]] == ["d2", "d1"]
    assert r.json()["intake"] == 500

    r = await client.post("/api/v1/analytics/hydration/history?tz=UTC", json={"logs": logs})
    assert r.status_code == 200
    assert [d["id"] for d in r.json()[0]["days"][0]["logs"]] == ["d2", "d1"]


@pytest.mark.asyncio
async def test_fractional_legacy_preset_rejected(client):
    r = await client.post(
        f"/api/v1/analytics/hydration/today?as_of={AS_OF}",
        json={"logs": [], "settings": {"presets": [250.7]}},
    )
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_sleep_log_lifecycle(client):
    entry = {
        "lights_out": "23:00",
        "wake_up": "06:45",
        "out_of_bed": "07:00",
        "latency": 14.6,
        "awakenings": 1,
        "awake_duration": 4.5,
        "subjective_quality": 7.5,
    }
    r = await client.post(
        f"/api/v1/sleep/logs/add?as_of={AS_OF}",
        json={"logs": [_night(1, "2026-10-17")], "entry": entry, "settings": {"target_hours": 8}},
    )
    assert r.status_code == 200
    added = r.json()
    stored = added["entry"]
    assert stored["date"] == AS_OF
    assert (stored["latency"], stored["awake_duration"], stored["subjective_quality"]) == (15, 5, 8)
    assert stored["total_time_in_bed"] == 480
    assert [log["id"] for log in added["logs"]] == [stored["id"], "s1"]

    r = await client.post(f"/api/v1/sleep/logs/{stored['id']}/delete", json={"logs": added["logs"]})
    assert r.status_code == 200
    assert [log["id"] for log in r.json()["logs"]] == ["s1"]
