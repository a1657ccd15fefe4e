from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse, Response
from typing import List
from keywordforge.core.assistant import AssistantResult, KeywordAssistant
from keywordforge.core.exporters import CSV_FILENAME, TEXT_FILENAME, to_csv, to_text
from keywordforge.core.frequency import analyze_frequency
from keywordforge.core.llm_client import LLMError
from keywordforge.core.options import Options
from keywordforge.core.pipeline import count_output, transform
from ..models import (AdCopyOut, FrequencyRow, GroupOut, GroupsOut, ProcessRequest, ProcessResponse,
                      TextIn, TextOut)
from ..services import assistant_service

router = APIRouter(prefix="/api/keywords", tags=["keywords"])


def require_assistant() -> KeywordAssistant:
    try:
        return assistant_service.get_assistant()
    except LLMError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get('/options/default', response_model=Options)
def default_options():
    return Options.preset()

@router.post('/process', response_model=ProcessResponse)
def process(req: ProcessRequest):
    output = transform(req.text, req.options)
    words, chars = count_output(output)
    return ProcessResponse(
        output=output,
        frequency=_frequency_rows(req.text),
        word_count=words,
        char_count=chars,
    )

@router.post('/frequency', response_model=List[FrequencyRow])
def frequency(req: TextIn):
    return _frequency_rows(req.text)

@router.post('/export/txt', response_class=PlainTextResponse)
def export_text(req: ProcessRequest):
    body = to_text(transform(req.text, req.options))
    return PlainTextResponse(body, headers=_attachment(TEXT_FILENAME))

@router.post('/export/csv')
def export_csv(req: TextIn):
    body = to_csv(analyze_frequency(req.text))
    return Response(content=body, media_type='text/csv; charset=utf-8', headers=_attachment(CSV_FILENAME))

# --- Generative-text actions ---

@router.post('/ai/expand', response_model=TextOut)
def ai_expand(req: TextIn, assistant: KeywordAssistant = Depends(require_assistant)):
    result = _checked(assistant.expand(req.text))
    return TextOut(text=result.text or "")

@router.post('/ai/group', response_model=GroupsOut)
def ai_group(req: TextIn, assistant: KeywordAssistant = Depends(require_assistant)):
    result = _checked(assistant.group(req.text))
    return GroupsOut(groups=[GroupOut(group_name=g.group_name, keywords=g.keywords) for g in result.groups])

@router.post('/ai/ad-copy', response_model=AdCopyOut)
def ai_ad_copy(req: TextIn, assistant: KeywordAssistant = Depends(require_assistant)):
    result = _checked(assistant.ad_copy(req.text))
    return AdCopyOut(lines=result.lines)

@router.post('/ai/summarize', response_model=TextOut)
def ai_summarize(req: TextIn, assistant: KeywordAssistant = Depends(require_assistant)):
    result = _checked(assistant.summarize(req.text))
    return TextOut(text=result.text or "")

# Helpers

def _frequency_rows(text: str) -> List[FrequencyRow]:
    return [FrequencyRow(keyword=e.keyword, frequency=e.frequency) for e in analyze_frequency(text)]

def _attachment(filename: str) -> dict:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}

def _checked(result: AssistantResult | None) -> AssistantResult:
    if result is None:
        raise HTTPException(status_code=400, detail='Text required')
    if not result.ok:
        raise HTTPException(status_code=502, detail=result.error or 'Generative-text request failed')
    return result
