import re
import logging
from typing import List, Optional

from .errors import MalformedRequestError
from .forms import FormFields, UploadedFile
from .models import CharacterSheet, UserInputs
from .prompts import CONTEXT_TEMPLATE, CHARACTER_SHEET_TEMPLATE

logger = logging.getLogger(__name__)

DEFAULT_GENRE = "TBD"
DEFAULT_PACING = "balanced"
DEFAULT_CHAPTERS = 30

_LEADING_INT = re.compile(r"^[+-]?\d+")


def _str(v) -> str:
    return ("" if v is None else str(v)).strip()


def csv_to_list(s) -> List[str]:
    return [x.strip() for x in _str(s).split(",") if x.strip()]


def parse_chapters(raw) -> int:
    """Leading-integer parse; blank means the default. No bounds are applied."""
    text = _str(raw) or str(DEFAULT_CHAPTERS)
    m = _LEADING_INT.match(text)
    if not m:
        raise MalformedRequestError(f"chapters must be an integer, got {text[:40]!r}")
    try:
        return int(m.group(0))
    except ValueError:
        # int() refuses strings past sys.get_int_max_str_digits()
        raise MalformedRequestError(f"chapters has too many digits ({len(m.group(0))})")


def _decode(upload: Optional[UploadedFile]) -> str:
    if upload is None:
        return ""
    return upload.data.decode("utf-8", errors="replace")


def build_user_inputs(form: FormFields) -> UserInputs:
    return UserInputs(
        seed=_str(form.get("seed")),
        genre=_str(form.get("genre")) or DEFAULT_GENRE,
        pacing=_str(form.get("pacing")) or DEFAULT_PACING,
        tone=csv_to_list(form.get("tone")),
        chapters=parse_chapters(form.get("chapters")),
        nogo=_str(form.get("nogo")),
        world_text=_decode(form.get_file("world")),
        character_sheets=[
            CharacterSheet(name=f.filename, text=_decode(f))
            for f in form.get_files("characters")
        ],
    )


def build_context(inputs: UserInputs) -> str:
    characters = "\n".join(
        CHARACTER_SHEET_TEMPLATE.format(name=sheet.name, text=sheet.text)
        for sheet in inputs.character_sheets
    )
    context = CONTEXT_TEMPLATE.format(
        seed=inputs.seed,
        genre=inputs.genre,
        pacing=inputs.pacing,
        tone=", ".join(inputs.tone),
        nogo=inputs.nogo or "none specified",
        world=inputs.world_text,
        characters=characters,
    ).strip()
    logger.info(f"Built context block ({len(context)} chars, {len(inputs.character_sheets)} character sheets)")
    return context
