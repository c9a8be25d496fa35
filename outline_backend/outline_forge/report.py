import json
from typing import Any

from pydantic import BaseModel

from .models import ChapterList, Outline, Premise


def to_json(obj: Any) -> str:
    if isinstance(obj, BaseModel):
        obj = obj.model_dump(mode="json")
    return json.dumps(obj, indent=2, ensure_ascii=False)


def md_block(title: str, body: str) -> str:
    return f"\n# {title}\n\n{body}\n"


def render_premise(p: Premise) -> str:
    return (
        f"**Title:** {p.working_title}\n\n"
        f"**Logline:** {p.logline}\n\n"
        f"{p.one_paragraph_summary}\n\n"
        f"**Theme:** {p.theme_statement}\n\n"
        f"**Stakes:** {p.stakes}\n\n"
        f"**Protagonist:** {p.protagonist.name}\n"
        f"- Want: {p.protagonist.want}\n"
        f"- Need: {p.protagonist.need}\n"
        f"- Arc: {p.protagonist.arc}\n\n"
        f"**Opposing Force:** {p.opposing_force}"
    )


def render_outline(o: Outline) -> str:
    acts = []
    for a in o.acts:
        beats = "\n- ".join(a.key_beats)
        acts.append(
            f"## Act {a.act_number}: {a.act_name}\n"
            f"**Purpose:** {a.purpose}\n\n"
            f"{a.summary}\n\n"
            f"**Key beats:**\n- {beats}\n\n"
            f"**Turning point:** {a.turning_point}\n\n"
            f"**Character shift:** {a.character_shift}\n\n"
            f"**End hook:** {a.end_hook}\n"
        )
    return "\n".join(acts)


def render_chapters(c: ChapterList) -> str:
    return "\n".join(
        f"## Chapter {ch.chapter_number}: {ch.chapter_title}\n"
        f"- Act: {ch.act_number}\n"
        f"- POV: {ch.pov}\n"
        f"- Goal: {ch.scene_goal}\n"
        f"- Conflict: {ch.conflict}\n"
        f"- Outcome: {ch.outcome}\n"
        f"- Hook: {ch.hook}\n"
        for ch in c.chapters
    )


def render_report(premise: Premise, outline: Outline, chapters: ChapterList) -> str:
    out = ""
    out += md_block("Core Premise", render_premise(premise))
    out += md_block("9-Act Outline", render_outline(outline))
    # Header uses the count the model reported, not the requested target
    out += md_block(f"Chapter Outline ({chapters.chapter_count} chapters)", render_chapters(chapters))

    out += "\n---\n\n# Raw JSON (for copy/paste)\n\n"
    out += "PREMISE JSON:\n" + to_json(premise) + "\n\n"
    out += "OUTLINE JSON:\n" + to_json(outline) + "\n\n"
    out += "CHAPTERS JSON:\n" + to_json(chapters) + "\n"
    return out
