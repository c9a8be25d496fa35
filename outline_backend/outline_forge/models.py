from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class CharacterSheet(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    text: str


class UserInputs(BaseModel):
    model_config = ConfigDict(frozen=True)

    seed: str = ""
    genre: str = "TBD"
    pacing: str = "balanced"
    tone: List[str] = Field(default_factory=list)
    chapters: int = 30
    nogo: str = ""
    world_text: str = ""
    character_sheets: List[CharacterSheet] = Field(default_factory=list)


# Shapes below mirror schemas.py; extra keys are rejected like the strict schema does.

class _Strict(BaseModel):
    model_config = ConfigDict(extra="forbid")


class Protagonist(_Strict):
    name: str
    want: str
    need: str
    arc: str


class Premise(_Strict):
    working_title: str
    logline: str
    one_paragraph_summary: str
    protagonist: Protagonist
    opposing_force: str
    stakes: str
    theme_statement: str


class Act(_Strict):
    act_number: int
    act_name: str
    purpose: str
    summary: str
    key_beats: List[str]
    turning_point: str
    character_shift: str
    end_hook: str


class Outline(_Strict):
    # Values are meant as 1-10 ratings but are not range-checked
    tension_curve_1_to_10: List[int] = Field(min_length=9, max_length=9)
    acts: List[Act] = Field(min_length=9, max_length=9)


class Chapter(_Strict):
    chapter_number: int
    act_number: int
    chapter_title: str
    pov: str
    scene_goal: str
    conflict: str
    outcome: str
    hook: str


class ChapterList(_Strict):
    chapter_count: int
    chapters: List[Chapter]


class OrchestrationState(BaseModel):
    inputs: UserInputs
    context: str
    premise: Optional[Premise] = None
    outline: Optional[Outline] = None
    chapters: Optional[ChapterList] = None
    report: Optional[str] = None
