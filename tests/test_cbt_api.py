"""Tests for the CBT toolbox: thought records, experiments and the distortions quiz."""

import pytest
from fastapi import HTTPException

from app.services import cbt_service


def thought_record(**overrides):
    body = {
        "situation": "Missed a deadline",
        "automatic_thought": "I always fail",
        "emotion_intensity": 80,
        "evidence_for": "It was late",
        "evidence_against": "First time this year",
        "balanced_thought": "One late report is not a pattern",
        "new_emotion_intensity": 40,
    }
    body.update(overrides)
    return body


class TestDistortionQuiz:
    def test_all_correct(self):
        result = cbt_service.grade_quiz(["allOrNothing", "mindReading", "catastrophizing"])
        assert result["score"] == 1.0
        assert result["missed"] == []
        assert all(r["correct"] for r in result["results"])

    def test_partial_answer_lists_missed(self):
        result = cbt_service.grade_quiz(["mindReading"])
        assert result["missed"] == ["allOrNothing", "catastrophizing"]
        assert result["score"] == 0.33

    def test_unknown_key(self):
        with pytest.raises(HTTPException) as exc:
            cbt_service.grade_quiz(["fortuneTelling"])
        assert exc.value.status_code == 400

    def test_rephrase_feedback_only_when_given(self):
        assert "rephrase_feedback" not in cbt_service.grade_quiz([])
        assert "rephrase_feedback" in cbt_service.grade_quiz([], rephrase="One mistake is not everything")

    def test_quiz_endpoints(self, client, auth_headers):
        quiz = client.get("/cbt/distortion-quiz").json()
        assert [o["key"] for o in quiz["options"]] == ["allOrNothing", "mindReading", "catastrophizing"]

        resp = client.post(
            "/cbt/distortion-quiz",
            json={"selected": ["catastrophizing"], "rephrase": ""},
            headers=auth_headers(),
        )
        assert resp.status_code == 200
        assert resp.json()["results"][0]["correct"] is True


class TestThoughtRecords:
    def test_create_list_delete(self, client, auth_headers):
        headers = auth_headers()
        resp = client.post("/cbt/thought-records", json=thought_record(), headers=headers)
        assert resp.status_code == 201
        record_id = resp.json()["id"]

        records = client.get("/cbt/thought-records", headers=headers).json()
        assert [r["balanced_thought"] for r in records] == ["One late report is not a pattern"]

        assert client.delete(f"/cbt/thought-records/{record_id}", headers=headers).status_code == 200
        assert client.get("/cbt/thought-records", headers=headers).json() == []

    def test_intensity_out_of_range(self, client, auth_headers):
        resp = client.post("/cbt/thought-records", json=thought_record(emotion_intensity=140), headers=auth_headers())
        assert resp.status_code == 400

    def test_records_are_private(self, client, auth_headers):
        client.post("/cbt/thought-records", json=thought_record(), headers=auth_headers())
        other = auth_headers(email="sam@example.com")
        assert client.get("/cbt/thought-records", headers=other).json() == []


class TestExperiments:
    def test_plan_then_record_outcome(self, client, auth_headers):
        headers = auth_headers()
        resp = client.post(
            "/cbt/experiments",
            json={"negative_prediction": "I'll never finish this", "experiment_plan": "Spend 10 min on it today"},
            headers=headers,
        )
        assert resp.status_code == 201
        experiment_id = resp.json()["id"]
        assert resp.json()["outcome"] is None

        resp = client.put(
            f"/cbt/experiments/{experiment_id}",
            json={"outcome": "Finished half", "comparison": "Much better than feared"},
            headers=headers,
        )
        assert resp.status_code == 200
        assert resp.json()["outcome"] == "Finished half"

        listed = client.get("/cbt/experiments", headers=headers).json()
        assert listed[0]["comparison"] == "Much better than feared"

    def test_plan_required(self, client, auth_headers):
        resp = client.post(
            "/cbt/experiments",
            json={"negative_prediction": "It will go badly", "experiment_plan": " "},
            headers=auth_headers(),
        )
        assert resp.status_code == 400

    def test_outcome_for_unknown_experiment(self, client, auth_headers):
        resp = client.put("/cbt/experiments/77", json={"outcome": "x"}, headers=auth_headers())
        assert resp.status_code == 404
