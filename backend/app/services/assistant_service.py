from __future__ import annotations
import threading
from keywordforge.core.assistant import KeywordAssistant
from keywordforge.core.llm_client import build_llm_client

# One assistant per process, built on first AI request so the API serves the
# pipeline routes without any generative-text configuration.

_ASSISTANT: KeywordAssistant | None = None
_ASSISTANT_LOCK = threading.RLock()


def get_assistant() -> KeywordAssistant:
    """FastAPI dependency; raises LLMError when the client is not configured."""
    global _ASSISTANT
    with _ASSISTANT_LOCK:
        if _ASSISTANT is None:
            _ASSISTANT = KeywordAssistant(build_llm_client())
        return _ASSISTANT


def reset_assistant():
    global _ASSISTANT
    with _ASSISTANT_LOCK:
        _ASSISTANT = None
