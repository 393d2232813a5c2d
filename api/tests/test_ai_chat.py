"""
Tests for the exercise-generating assistant. The LLM API is mocked.
"""
import json
from unittest.mock import MagicMock

import pytest
import requests

from app.core.config import settings
from app.services import llm_helpers

API = "/api/v1"


def completion(content=None, tool_arguments=None):
    message = {"role": "assistant", "content": content}
    if tool_arguments is not None:
        message["tool_calls"] = [{
            "id": "call_1",
            "type": "function",
            "function": {"name": "create_exercise", "arguments": json.dumps(tool_arguments)},
        }]
    response = MagicMock()
    response.raise_for_status.return_value = None
    response.json.return_value = {
        "choices": [{"message": message}],
        "usage": {"prompt_tokens": 120, "completion_tokens": 80, "total_tokens": 200},
    }
    return response


@pytest.fixture
def llm(monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", "test-key")
    post = MagicMock()
    monkeypatch.setattr(llm_helpers.requests, "post", post)
    return post


def chat(client, text="Create a beginner exercise about clicking"):
    return client.post(f"{API}/ai-chat", json={"messages": [{"role": "user", "content": text}]})


def test_plain_reply_creates_nothing(client, llm):
    llm.return_value = completion(content="Which actions would you like to practise?")

    response = chat(client, "I want to learn Playwright")

    assert response.status_code == 200
    assert response.json() == {
        "role": "assistant",
        "content": "Which actions would you like to practise?",
        "exercise": None,
    }
    assert client.get(f"{API}/exercises").json()["exercises"] == []


def test_tool_call_creates_exercise_in_ai_folder(client, llm):
    llm.return_value = completion(tool_arguments={
        "title": "Double click",
        "description": "Double click the .item element.",
        "expected_answer": "await page.locator('.item').dblclick();",
        "alternative_answers": ["await page.dblclick('.item');"],
        "hints": ["Use dblclick()"],
        "difficulty": 1,
        "category": "Actions",
        "folder_id": "default",
    })

    response = chat(client)

    assert response.status_code == 200
    data = response.json()
    assert data["content"] == 'Created the exercise "Double click".'
    assert data["exercise"]["folder_id"] == "ai-generated"
    assert data["exercise"]["expected_answer"] == "await page.locator('.item').dblclick();"

    folders = [f["id"] for f in client.get(f"{API}/folders").json()["folders"]]
    assert "ai-generated" in folders
    assert len(client.get(f"{API}/exercises", params={"folder_id": "ai-generated"}).json()["exercises"]) == 1


def test_request_sends_tool_and_system_prompt(client, llm):
    llm.return_value = completion(content="Sure")
    chat(client, "hello")

    payload = llm.call_args.kwargs["json"]
    assert payload["messages"][0]["role"] == "system"
    assert payload["messages"][-1] == {"role": "user", "content": "hello"}
    assert payload["tools"][0]["function"]["name"] == "create_exercise"
    assert llm.call_args.kwargs["headers"]["Authorization"] == "Bearer test-key"


def test_invalid_tool_arguments_are_upstream_errors(client, llm):
    llm.return_value = completion(tool_arguments={"title": "Missing everything"})

    response = chat(client)

    assert response.status_code == 502
    assert response.json()["type"] == "UpstreamError"
    assert client.get(f"{API}/exercises").json()["exercises"] == []


def test_http_failure_is_upstream_error(client, llm):
    llm.side_effect = requests.exceptions.ConnectionError("boom")
    assert chat(client).status_code == 502


def test_missing_api_key(client, monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", "")
    response = chat(client)
    assert response.status_code == 502
    assert "not configured" in response.json()["detail"]


def test_empty_conversation_is_rejected(client, llm):
    assert client.post(f"{API}/ai-chat", json={"messages": []}).status_code == 422
    llm.assert_not_called()


def test_cost_estimate():
    assert llm_helpers.calculate_openai_cost(1_000_000, 1_000_000, "gpt-4o-mini") == pytest.approx(0.75)
    assert llm_helpers.calculate_openai_cost(1_000_000, 0, "gpt-4o") == pytest.approx(2.50)
