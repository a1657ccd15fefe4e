from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional
from datetime import datetime, timezone
from pathlib import Path
import os, json

from .llm_client import BaseLLMClient, KeywordGroup, LLMError, GROUP_SCHEMA, parse_groups

# NOTE: every action writes a per-run log summarizing the request and outcome.
# Log location: KF_LOG_DIR or <repo root>/logs, file assistant_run_<n>.json
# API keys are NEVER written.

EXPAND_PROMPT = (
    "You are an Amazon SEO expert. Given the following keywords, generate 50 more highly relevant "
    "and related keywords for an Amazon product listing. Return only the new keywords, separated by spaces. "
    "Keywords: {keywords}"
)
GROUP_PROMPT = (
    "You are an Amazon SEO expert. Analyze this list of keywords and group them by customer intent "
    "or logical category. Keywords: {keywords}"
)
AD_COPY_PROMPT = (
    "You are a professional copywriter specializing in Amazon PPC ads. Using the following keywords, "
    "write 5 compelling, short, and high-converting ad headlines. Each headline should be on a new line. "
    "Keywords: {keywords}"
)
SUMMARIZE_PROMPT = (
    "You are an Amazon SEO expert. Analyze the following list of keywords and summarize it into the most "
    "powerful and high-ranking keywords possible. The final output must be a single line of text and "
    "strictly under 200 characters including spaces. Keywords: {keywords}"
)


@dataclass
class AssistantResult:
    ok: bool
    text: Optional[str] = None
    lines: List[str] = field(default_factory=list)
    groups: List[KeywordGroup] = field(default_factory=list)
    error: Optional[str] = None


class KeywordAssistant:
    """Generative-text helpers around a keyword list.

    Failures from the client are caught here and returned as AssistantResult(ok=False, error=...);
    nothing raised by the service reaches the caller. Blank input returns None without a request.
    """
    def __init__(self, client: BaseLLMClient):
        self.client = client
        self.last_log_path: str | None = None

    def expand(self, raw_text: str) -> Optional[AssistantResult]:
        """Generate related keywords and return raw_text with them appended on a new line."""
        if not raw_text or not raw_text.strip():
            return None
        prompt = EXPAND_PROMPT.format(keywords=raw_text)
        try:
            generated = self.client.generate(prompt)
        except LLMError as e:
            return self._failed("expand", raw_text, e)
        result = AssistantResult(ok=True, text=f"{raw_text}\n{generated}")
        self._write_log("expand", raw_text, generated, reason="ok")
        return result

    def group(self, processed: str) -> Optional[AssistantResult]:
        if not processed or not processed.strip():
            return None
        prompt = GROUP_PROMPT.format(keywords=processed)
        try:
            raw = self.client.generate(prompt, response_schema=GROUP_SCHEMA)
            groups = parse_groups(raw)
        except LLMError as e:
            return self._failed("group", processed, e)
        self._write_log("group", processed, raw, reason="ok" if groups else "no_groups")
        return AssistantResult(ok=True, groups=groups)

    def ad_copy(self, processed: str) -> Optional[AssistantResult]:
        if not processed or not processed.strip():
            return None
        prompt = AD_COPY_PROMPT.format(keywords=processed)
        try:
            generated = self.client.generate(prompt)
        except LLMError as e:
            return self._failed("ad_copy", processed, e)
        lines = [ln.strip() for ln in generated.split("\n") if ln.strip()]
        self._write_log("ad_copy", processed, generated, reason="ok")
        return AssistantResult(ok=True, text=generated, lines=lines)

    def summarize(self, processed: str) -> Optional[AssistantResult]:
        if not processed or not processed.strip():
            return None
        prompt = SUMMARIZE_PROMPT.format(keywords=processed)
        try:
            generated = self.client.generate(prompt)
        except LLMError as e:
            return self._failed("summarize", processed, e)
        self._write_log("summarize", processed, generated, reason="ok")
        return AssistantResult(ok=True, text=generated.strip())

    def _failed(self, action: str, source: str, err: LLMError) -> AssistantResult:
        self._write_log(action, source, None, reason="error", error=str(err))
        return AssistantResult(ok=False, error=str(err))

    # ---- Run logs ----
    def _log_dir(self) -> Path:
        override = os.environ.get("KF_LOG_DIR")
        base = Path(override) if override else _project_root() / "logs"
        base.mkdir(parents=True, exist_ok=True)
        return base

    def _next_log_path(self, log_dir: Path) -> Path:
        """Next assistant_run_<n>.json in log_dir.

        The last n is kept in assistant_run_counter.txt; without a readable counter the
        highest n among existing run files is used.
        """
        counter = log_dir / _COUNTER_NAME
        try:
            last = int(counter.read_text(encoding="utf-8").strip())
        except (OSError, ValueError):
            last = max((_run_number(p) for p in log_dir.glob("assistant_run_*.json")), default=0)
        counter.write_text(str(last + 1), encoding="utf-8")
        return log_dir / f"assistant_run_{last + 1}.json"

    def _write_log(self, action: str, source: str, output: Optional[str], reason: str, error: Optional[str] = None):
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "action": action,
            "reason": reason,
            "model": getattr(self.client, "model", None),
            "input_char_len": len(source),
            "input_preview": source[:500],
            "output_char_len": len(output) if output is not None else 0,
            "output_preview": (output or "")[:1000],
            "error": error,
        }
        try:
            path = self._next_log_path(self._log_dir())
            path.write_text(json.dumps(entry, indent=2), encoding="utf-8")
            self.last_log_path = str(path)
        except OSError:
            self.last_log_path = None


_COUNTER_NAME = "assistant_run_counter.txt"
_ROOT_MARKERS = (".git", "pyproject.toml")


def _project_root() -> Path:
    # nearest directory at or above cwd holding a project marker, else cwd
    cwd = Path.cwd().resolve()
    for candidate in (cwd, *cwd.parents):
        if any((candidate / m).exists() for m in _ROOT_MARKERS):
            return candidate
    return cwd


def _run_number(path: Path) -> int:
    suffix = path.stem[len("assistant_run_"):]
    return int(suffix) if suffix.isdigit() else 0

__all__ = ["KeywordAssistant", "AssistantResult"]
