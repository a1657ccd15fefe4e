from __future__ import annotations
from typing import List
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from keywordforge.core.options import Options

# Wire shapes for the web API; JSON keys are camelCase to match the web form.

class _ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

class TextIn(_ApiModel):
    text: str = ""

class ProcessRequest(_ApiModel):
    text: str = ""
    options: Options = Field(default_factory=Options)

class FrequencyRow(_ApiModel):
    keyword: str
    frequency: int

class ProcessResponse(_ApiModel):
    output: str
    frequency: List[FrequencyRow] = []
    word_count: int = 0
    char_count: int = 0

class TextOut(_ApiModel):
    text: str

class AdCopyOut(_ApiModel):
    lines: List[str] = []

class GroupOut(_ApiModel):
    group_name: str
    keywords: List[str] = []

class GroupsOut(_ApiModel):
    groups: List[GroupOut] = []
