from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
import json
import os
import requests


class LLMError(RuntimeError):
    """Raised for any failure talking to the generative-text service."""


@dataclass
class KeywordGroup:
    group_name: str
    keywords: List[str] = field(default_factory=list)


# Structured-output schema for grouping keywords by intent
GROUP_SCHEMA: Dict[str, Any] = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "groupName": {
                "type": "STRING",
                "description": "The name of the keyword group (e.g., 'Color Variations', 'Competitor Brands').",
            },
            "keywords": {"type": "ARRAY", "items": {"type": "STRING"}},
        },
        "required": ["groupName", "keywords"],
    },
}


class BaseLLMClient(ABC):
    @abstractmethod
    def generate(self, prompt: str, *, response_schema: Optional[Dict[str, Any]] = None) -> str:
        ...


class GeminiClient(BaseLLMClient):
    """Gemini generateContent client over the raw REST API (no SDK dependency).

    Env Vars:
      KF_GEMINI_API_KEY      (required)
      KF_GEMINI_MODEL        (model name, default gemini-2.0-flash)
      KF_GEMINI_ENDPOINT     (API base, default https://generativelanguage.googleapis.com/v1beta)
      KF_GEMINI_TIMEOUT      (request timeout seconds, default 60)
      KF_GEMINI_TEMPERATURE  (optional sampling temperature)
    """
    def __init__(self):
        self.key = os.environ.get("KF_GEMINI_API_KEY")
        if not self.key:
            raise LLMError("Missing KF_GEMINI_API_KEY")
        self.model = os.environ.get("KF_GEMINI_MODEL", "gemini-2.0-flash")
        self.endpoint = os.environ.get("KF_GEMINI_ENDPOINT", "https://generativelanguage.googleapis.com/v1beta").rstrip("/")
        self.timeout = float(os.environ.get("KF_GEMINI_TIMEOUT", "60"))
        temp = os.environ.get("KF_GEMINI_TEMPERATURE")
        self.temperature = float(temp) if temp else None

    def _build_body(self, prompt: str, response_schema: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        body: Dict[str, Any] = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        gen_config: Dict[str, Any] = {}
        if response_schema is not None:
            gen_config["responseMimeType"] = "application/json"
            gen_config["responseSchema"] = response_schema
        if self.temperature is not None:
            gen_config["temperature"] = self.temperature
        if gen_config:
            body["generationConfig"] = gen_config
        return body

    def generate(self, prompt: str, *, response_schema: Optional[Dict[str, Any]] = None) -> str:
        url = f"{self.endpoint}/models/{self.model}:generateContent"
        headers = {
            "x-goog-api-key": self.key,
            "Content-Type": "application/json",
        }
        try:
            resp = requests.post(url, headers=headers, json=self._build_body(prompt, response_schema), timeout=self.timeout)
        except requests.RequestException as e:
            raise LLMError(f"Gemini network error: {e}") from e
        if resp.status_code != 200:
            raise LLMError(f"API call failed with status: {resp.status_code}: {resp.text[:400]}")
        try:
            j = resp.json()
        except ValueError as e:
            raise LLMError(f"Unparseable Gemini response: {e}\nRaw: {resp.text[:400]}") from e
        return extract_text(j)


def build_llm_client() -> BaseLLMClient:
    """Factory for the configured generative-text client.

    Environment must provide KF_GEMINI_API_KEY.
    """
    return GeminiClient()


def extract_text(payload: Any) -> str:
    """Pull candidates[0].content.parts[0].text out of a generateContent response."""
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise LLMError(f"Could not extract text from API response: {e}")
    if not isinstance(text, str):
        raise LLMError("Could not extract text from API response: text is not a string")
    return text


_GROUP_GAP = " \t\r\n,"


def _leading_groups(raw: str) -> List[Any]:
    # Group objects decoded one by one from the array start; stops at the first
    # object the model did not finish (token limit) or at the closing bracket.
    decoder = json.JSONDecoder()
    start = raw.find('[')
    pos = start + 1 if start != -1 else 0
    groups = []
    while True:
        while pos < len(raw) and raw[pos] in _GROUP_GAP:
            pos += 1
        if pos >= len(raw) or raw[pos] != '{':
            return groups
        try:
            obj, pos = decoder.raw_decode(raw, pos)
        except ValueError:
            return groups
        groups.append(obj)


def _load_group_array(raw: str) -> Any:
    try:
        return json.loads(raw.strip())
    except ValueError:
        pass
    # array wrapped in prose or a code fence
    first = raw.find('[')
    last = raw.rfind(']')
    if first != -1 and last > first:
        try:
            return json.loads(raw[first:last+1])
        except ValueError:
            pass
    groups = _leading_groups(raw)
    if not groups:
        raise LLMError(f"Unable to parse keyword groups JSON: {raw[:200]}")
    return groups


def parse_groups(raw: str) -> List[KeywordGroup]:
    """Parse the grouping reply into KeywordGroup list.

    Accepts a bare JSON array, an array wrapped in other text, or an array cut off
    mid-object (the complete leading groups are kept). Any other JSON value is an error.
    """
    arr = _load_group_array(raw)
    if not isinstance(arr, list):
        raise LLMError("Keyword groups JSON is not a list")
    out: List[KeywordGroup] = []
    for item in arr:
        if not isinstance(item, dict) or 'groupName' not in item:
            continue
        kws = item.get('keywords') or []
        if not isinstance(kws, list):
            continue
        out.append(KeywordGroup(group_name=str(item['groupName']).strip(), keywords=[str(k) for k in kws]))
    return out
