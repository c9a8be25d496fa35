import copy

import pytest
from fastapi.testclient import TestClient

from outline_forge.app import app, get_caller, get_settings
from outline_forge.errors import ProviderCallError
from outline_forge.llm import StructuredCaller
from outline_forge.settings import Settings


PREMISE = {
    "working_title": "The Salt Lantern",
    "logline": "A lighthouse keeper's daughter must relight a cursed beacon before the drowned fleet returns.",
    "one_paragraph_summary": "Mara inherits a lighthouse that guides the dead instead of the living.",
    "protagonist": {
        "name": "Mara Voss",
        "want": "to leave the island",
        "need": "to accept her family's duty",
        "arc": "from flight to stewardship",
    },
    "opposing_force": "The Tidewarden, captain of the drowned fleet",
    "stakes": "The harbor town drowns if the beacon stays dark.",
    "theme_statement": "Duty chosen freely becomes love.",
}


def _act(n):
    return {
        "act_number": n,
        "act_name": f"Act name {n}",
        "purpose": f"Purpose {n}",
        "summary": f"Summary of act {n}.",
        "key_beats": [f"beat {n}a", f"beat {n}b"],
        "turning_point": f"Turn {n}",
        "character_shift": f"Shift {n}",
        "end_hook": f"Hook {n}",
    }


OUTLINE = {
    "tension_curve_1_to_10": [2, 3, 4, 5, 6, 7, 9, 10, 4],
    "acts": [_act(n) for n in range(1, 10)],
}


CHAPTERS = {
    "chapter_count": 3,
    "chapters": [
        {
            "chapter_number": 1,
            "act_number": 1,
            "chapter_title": "Low Tide",
            "pov": "Mara",
            "scene_goal": "Sell the lighthouse",
            "conflict": "No buyer will set foot on the island",
            "outcome": "She finds her father's log",
            "hook": "The lamp lights itself",
        },
        {
            "chapter_number": 2,
            "act_number": 2,
            "chapter_title": "The Drowned Bell",
            "pov": "Tidewarden",
            "scene_goal": "Find the keeper",
            "conflict": "The beacon burns him",
            "outcome": "He marks Mara",
            "hook": "A bell rings under the water",
        },
        {
            "chapter_number": 3,
            "act_number": 2,
            "chapter_title": "Harbor Lights",
            "pov": "Mara",
            "scene_goal": "Warn the town",
            "conflict": "Nobody believes her",
            "outcome": "The mayor locks her out",
            "hook": "Fog rolls in at noon",
        },
    ],
}

RESPONSES = {"premise": PREMISE, "outline9": OUTLINE, "chapters": CHAPTERS}


class FakeCaller(StructuredCaller):
    """Records every call and answers from canned responses keyed by schema name."""

    def __init__(self, responses=None, fail_on=None, error=None):
        self.responses = responses or RESPONSES
        self.fail_on = fail_on
        self.error = error
        self.calls = []

    async def call(self, *, instructions, user, schema_name, schema, max_tokens=2500, temperature=0.5):
        self.calls.append({
            "instructions": instructions,
            "user": user,
            "schema_name": schema_name,
            "schema": schema,
            "max_tokens": max_tokens,
            "temperature": temperature,
        })
        if schema_name == self.fail_on:
            raise self.error or ProviderCallError(f"OpenAI call for '{schema_name}' failed: connection reset")
        return copy.deepcopy(self.responses[schema_name])

    @property
    def schema_names(self):
        return [c["schema_name"] for c in self.calls]


@pytest.fixture
def fake_caller():
    return FakeCaller()


@pytest.fixture
def make_client():
    def _make(caller, settings=None):
        settings = settings or Settings(openai_api_key="sk-test", openai_model="gpt-test")
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_caller] = lambda: caller
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


def form_files(world=b"The island of Brackwater.", characters=None):
    files = [("world", ("world.md", world, "text/markdown"))]
    for name, data in characters or []:
        files.append(("characters", (name, data, "text/markdown")))
    return files
