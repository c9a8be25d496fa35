"""JSON Schema documents sent as the strict output format of each stage.

Each function returns a fresh dict so callers may adjust their copy.
"""

from typing import Any, Dict

PREMISE_SCHEMA_NAME = "premise"
OUTLINE_SCHEMA_NAME = "outline9"
CHAPTERS_SCHEMA_NAME = "chapters"

ACT_COUNT = 9


def _obj(properties: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "object",
        "additionalProperties": False,
        "properties": properties,
        "required": list(properties),
    }


def _strings(*names: str) -> Dict[str, Any]:
    return {name: {"type": "string"} for name in names}


def premise_schema() -> Dict[str, Any]:
    return _obj({
        **_strings("working_title", "logline", "one_paragraph_summary"),
        "protagonist": _obj(_strings("name", "want", "need", "arc")),
        **_strings("opposing_force", "stakes", "theme_statement"),
    })


def outline_schema() -> Dict[str, Any]:
    act = _obj({
        "act_number": {"type": "integer"},
        **_strings("act_name", "purpose", "summary"),
        "key_beats": {"type": "array", "items": {"type": "string"}},
        **_strings("turning_point", "character_shift", "end_hook"),
    })
    return _obj({
        # No minimum/maximum: the 1-10 scale is only asked for in the prompt
        "tension_curve_1_to_10": {
            "type": "array",
            "items": {"type": "integer"},
            "minItems": ACT_COUNT,
            "maxItems": ACT_COUNT,
        },
        "acts": {
            "type": "array",
            "minItems": ACT_COUNT,
            "maxItems": ACT_COUNT,
            "items": act,
        },
    })


def chapters_schema() -> Dict[str, Any]:
    chapter = _obj({
        "chapter_number": {"type": "integer"},
        "act_number": {"type": "integer"},
        **_strings("chapter_title", "pov", "scene_goal", "conflict", "outcome", "hook"),
    })
    return _obj({
        "chapter_count": {"type": "integer"},
        "chapters": {"type": "array", "items": chapter},
    })
