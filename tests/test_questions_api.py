# tests/test_questions_api.py
import pytest
from fastapi.testclient import TestClient

VALID_RESPONSE = '{"question": "Q", "options": ["a", "b", "c", "d"]}'


class TestQuestionsAPI:
    def test_get_question_success(self, client: TestClient, text_generator):
        text_generator.responses = [VALID_RESPONSE]
        response = client.get("/api/v1/questions/3")
        assert response.status_code == 200
        assert response.json() == {"question": "Q", "options": ["a", "b", "c", "d"]}
        assert len(text_generator.calls) == 1

    def test_question_number_drives_the_prompt(self, client: TestClient, text_generator):
        text_generator.responses = [VALID_RESPONSE]
        client.get("/api/v1/questions/4")
        messages = text_generator.calls[0].messages
        assert messages[1].content.endswith("tone: Warm")
        assert "regarding speed" in messages[4].content

    def test_fenced_response_is_accepted(self, client: TestClient, text_generator):
        text_generator.responses = ["```" + VALID_RESPONSE + "```"]
        response = client.get("/api/v1/questions/1")
        assert response.status_code == 200
        assert response.json()["options"] == ["a", "b", "c", "d"]

    def test_extra_keys_are_not_returned(self, client: TestClient, text_generator):
        text_generator.responses = ['{"question": "Q", "options": ["a", "b", "c", "d"], "answer": "a"}']
        response = client.get("/api/v1/questions/1")
        assert response.json() == {"question": "Q", "options": ["a", "b", "c", "d"]}

    @pytest.mark.parametrize("raw_id", ["3.0", "1e1", "-2"])
    def test_whole_number_spellings_are_accepted(self, client: TestClient, text_generator, raw_id):
        text_generator.responses = [VALID_RESPONSE]
        response = client.get(f"/api/v1/questions/{raw_id}")
        assert response.status_code == 200

    @pytest.mark.parametrize("raw_id", ["abc", "1.5", "NaN", "inf", "12abc", "1_000", "١٢", "0x10", "1e400"])
    def test_invalid_question_id(self, client: TestClient, text_generator, raw_id):
        response = client.get(f"/api/v1/questions/{raw_id}")
        assert response.status_code == 400
        error = response.json()["error"]
        assert error["name"] == "ValidationError"
        assert len(error["issues"]) == 1
        assert error["issues"][0]["input"] == raw_id
        assert error["issues"][0]["type"] == "value_error"
        # the model is never prompted for an invalid id
        assert text_generator.calls == []

    def test_generation_exhausted(self, client: TestClient, text_generator):
        text_generator.responses = ["nope"] * 4 + ['{"question": "Q", "options": ["a", "b", "c"]}']
        response = client.get("/api/v1/questions/7")
        assert response.status_code == 500
        detail = response.json()["detail"]
        assert detail.startswith("error prompting ai: ValidationError")
        assert len(text_generator.calls) == 5

    def test_recovers_within_retry_budget(self, client: TestClient, text_generator):
        text_generator.responses = [RuntimeError("boom")] * 4 + [VALID_RESPONSE]
        response = client.get("/api/v1/questions/7")
        assert response.status_code == 200
        assert len(text_generator.calls) == 5

    def test_method_not_allowed(self, client: TestClient):
        response = client.post("/api/v1/questions/1")
        assert response.status_code == 405
