"""Tests for stateless subtitle tool endpoints."""

from fastapi import status


class TestReflowEndpoint:
    """Test POST /subtitles/reflow."""

    def test_reflow_splits_long_entries(self, client):
        response = client.post(
            "/api/v1/subtitles/reflow",
            json={
                "entries": [
                    {"id": 1, "start": 0, "end": 2000, "text": "hi"},
                    {"id": 2, "start": 1000, "end": 3500, "text": "aaaa bbbb cccc dddd eeeee"},
                ],
                "max_chars_per_line": 10,
            },
        )

        assert response.status_code == status.HTTP_200_OK
        entries = response.json()["entries"]
        assert [entry["id"] for entry in entries] == [1, 2, 10002, 20002]
        assert [(entry["start"], entry["end"]) for entry in entries[1:]] == [
            (1000, 1900),
            (1900, 2800),
            (2800, 3300),
        ]

    def test_reflow_budget_out_of_range(self, client):
        response = client.post(
            "/api/v1/subtitles/reflow", json={"entries": [], "max_chars_per_line": 150}
        )
        assert response.status_code == 422


class TestSerializeEndpoint:
    """Test POST /subtitles/serialize."""

    def test_serialize(self, client):
        response = client.post(
            "/api/v1/subtitles/serialize",
            json={
                "entries": [
                    {"id": 5, "start": 0, "end": 1000, "text": "A"},
                    {"id": 3, "start": 1000, "end": 2000, "text": "B"},
                ]
            },
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.text == (
            "1\n00:00:00,000 --> 00:00:01,000\nA\n\n2\n00:00:01,000 --> 00:00:02,000\nB"
        )


class TestTimingEndpoint:
    """Test POST /subtitles/timing."""

    def test_too_short(self, client):
        response = client.post(
            "/api/v1/subtitles/timing", json={"text": "hello world", "start": 0, "end": 500}
        )

        data = response.json()
        assert data["too_short"] is True
        assert data["required_duration"] == 734
        assert data["recommended_end"] == 734
        assert data["chars_per_second"] == 15

    def test_long_enough(self, client):
        response = client.post(
            "/api/v1/subtitles/timing", json={"text": "hello world", "start": 0, "end": 734}
        )
        assert response.json()["too_short"] is False
