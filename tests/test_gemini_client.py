import os
import pytest
import requests

import keywordforge.core.llm_client as llm_mod
from keywordforge.core.llm_client import GeminiClient, LLMError, GROUP_SCHEMA, build_llm_client, parse_groups


class _FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


def _ok(text):
    return _FakeResponse(payload={"candidates": [{"content": {"parts": [{"text": text}]}}]}, text="{}")


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("KF_GEMINI_API_KEY", "test-key")
    monkeypatch.delenv("KF_GEMINI_MODEL", raising=False)
    monkeypatch.delenv("KF_GEMINI_ENDPOINT", raising=False)
    monkeypatch.delenv("KF_GEMINI_TEMPERATURE", raising=False)
    return GeminiClient()


def test_missing_key(monkeypatch):
    monkeypatch.delenv("KF_GEMINI_API_KEY", raising=False)
    with pytest.raises(LLMError):
        build_llm_client()

def test_generate_posts_prompt(client, monkeypatch):
    calls = {}
    def _post(url, headers=None, json=None, timeout=None):
        calls.update(url=url, headers=headers, json=json, timeout=timeout)
        return _ok("more keywords")
    monkeypatch.setattr(llm_mod.requests, "post", _post)
    assert client.generate("hello") == "more keywords"
    assert calls["url"] == "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash:generateContent"
    assert calls["headers"]["x-goog-api-key"] == "test-key"
    assert calls["json"] == {"contents": [{"role": "user", "parts": [{"text": "hello"}]}]}
    assert calls["timeout"] == 60.0

def test_generate_with_schema(client, monkeypatch):
    seen = {}
    def _post(url, headers=None, json=None, timeout=None):
        seen["body"] = json
        return _ok('[{"groupName":"A","keywords":["x"]}]')
    monkeypatch.setattr(llm_mod.requests, "post", _post)
    raw = client.generate("group", response_schema=GROUP_SCHEMA)
    cfg = seen["body"]["generationConfig"]
    assert cfg["responseMimeType"] == "application/json"
    assert cfg["responseSchema"] is GROUP_SCHEMA
    assert parse_groups(raw)[0].group_name == "A"

def test_non_200(client, monkeypatch):
    monkeypatch.setattr(llm_mod.requests, "post", lambda *a, **k: _FakeResponse(status_code=500, text="boom"))
    with pytest.raises(LLMError, match="status: 500"):
        client.generate("x")

def test_network_error(client, monkeypatch):
    def _post(*a, **k):
        raise requests.ConnectionError("unreachable")
    monkeypatch.setattr(llm_mod.requests, "post", _post)
    with pytest.raises(LLMError, match="network error"):
        client.generate("x")

def test_unparseable_body(client, monkeypatch):
    monkeypatch.setattr(llm_mod.requests, "post", lambda *a, **k: _FakeResponse(payload=None, text="<html>"))
    with pytest.raises(LLMError):
        client.generate("x")

def test_unexpected_shape(client, monkeypatch):
    monkeypatch.setattr(llm_mod.requests, "post", lambda *a, **k: _FakeResponse(payload={"candidates": []}))
    with pytest.raises(LLMError, match="Could not extract text"):
        client.generate("x")

def test_env_overrides(monkeypatch):
    monkeypatch.setenv("KF_GEMINI_API_KEY", "k")
    monkeypatch.setenv("KF_GEMINI_MODEL", "gemini-x")
    monkeypatch.setenv("KF_GEMINI_ENDPOINT", "http://localhost:9999/v1/")
    monkeypatch.setenv("KF_GEMINI_TEMPERATURE", "0.2")
    c = GeminiClient()
    assert c.endpoint == "http://localhost:9999/v1"
    assert c.model == "gemini-x"
    assert c._build_body("p", None)["generationConfig"] == {"temperature": 0.2}


def test_gemini_live():
    """Live request; skips unless KF_LLM_LIVE_TEST=1 and an API key are present."""
    if os.environ.get("KF_LLM_LIVE_TEST") != "1":
        pytest.skip("KF_LLM_LIVE_TEST not set")
    if not os.environ.get("KF_GEMINI_API_KEY"):
        pytest.skip("Missing KF_GEMINI_API_KEY")
    client = GeminiClient()
    print("[gemini-test] Requesting keyword groups")
    raw = client.generate(
        "Group these keywords by customer intent. Keywords: running shoes red blue trail waterproof nike",
        response_schema=GROUP_SCHEMA,
    )
    groups = parse_groups(raw)
    print(f"[gemini-test] Received {len(groups)} groups")
    assert groups
