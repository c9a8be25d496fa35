import logging
from typing import Any, Dict, Type, TypeVar

from langgraph.graph import StateGraph, END
from pydantic import BaseModel, ValidationError

from .context import build_context
from .errors import SchemaParseError
from .llm import StructuredCaller
from .models import ChapterList, OrchestrationState, Outline, Premise, UserInputs
from .prompts import (
    NINE_ACT_DEF,
    PREMISE_INSTRUCTIONS,
    OUTLINE_INSTRUCTIONS,
    CHAPTERS_INSTRUCTIONS,
    PREMISE_USER_TEMPLATE,
    OUTLINE_USER_TEMPLATE,
    CHAPTERS_USER_TEMPLATE,
)
from .report import render_report, to_json
from .schemas import (
    PREMISE_SCHEMA_NAME,
    OUTLINE_SCHEMA_NAME,
    CHAPTERS_SCHEMA_NAME,
    premise_schema,
    outline_schema,
    chapters_schema,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _validate(model: Type[M], raw: Dict[str, Any], schema_name: str) -> M:
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        logger.error(f"Response for '{schema_name}' does not match its schema: {e.error_count()} errors")
        raise SchemaParseError(f"OpenAI output for '{schema_name}' does not match the schema: {e}") from e


def premise_prompt(state: OrchestrationState) -> str:
    return PREMISE_USER_TEMPLATE.format(context=state.context)


def outline_prompt(state: OrchestrationState) -> str:
    return OUTLINE_USER_TEMPLATE.format(
        nine_act_def=to_json(NINE_ACT_DEF),
        premise=to_json(state.premise),
        context=state.context,
    ).strip()


def chapters_prompt(state: OrchestrationState) -> str:
    return CHAPTERS_USER_TEMPLATE.format(
        target=state.inputs.chapters,
        premise=to_json(state.premise),
        outline=to_json(state.outline),
        context=state.context,
    ).strip()


def build_graph(caller: StructuredCaller):
    async def node_premise(state: OrchestrationState) -> dict:
        logger.info("Stage 1/3: generating premise")
        raw = await caller.call(
            instructions=PREMISE_INSTRUCTIONS,
            user=premise_prompt(state),
            schema_name=PREMISE_SCHEMA_NAME,
            schema=premise_schema(),
            max_tokens=2200,
            temperature=0.45,
        )
        premise = _validate(Premise, raw, PREMISE_SCHEMA_NAME)
        logger.info(f"Premise ready: {premise.working_title!r}")
        return {"premise": premise}

    async def node_outline(state: OrchestrationState) -> dict:
        assert state.premise
        logger.info("Stage 2/3: generating 9-act outline")
        raw = await caller.call(
            instructions=OUTLINE_INSTRUCTIONS,
            user=outline_prompt(state),
            schema_name=OUTLINE_SCHEMA_NAME,
            schema=outline_schema(),
            max_tokens=3200,
            temperature=0.5,
        )
        outline = _validate(Outline, raw, OUTLINE_SCHEMA_NAME)
        logger.info(f"Outline ready with {len(outline.acts)} acts")
        return {"outline": outline}

    async def node_chapters(state: OrchestrationState) -> dict:
        assert state.premise and state.outline
        logger.info(f"Stage 3/3: generating chapter outline (target {state.inputs.chapters})")
        raw = await caller.call(
            instructions=CHAPTERS_INSTRUCTIONS,
            user=chapters_prompt(state),
            schema_name=CHAPTERS_SCHEMA_NAME,
            schema=chapters_schema(),
            max_tokens=3800,
            temperature=0.55,
        )
        chapters = _validate(ChapterList, raw, CHAPTERS_SCHEMA_NAME)
        if chapters.chapter_count != state.inputs.chapters:
            logger.info(
                f"Model returned {chapters.chapter_count} chapters, "
                f"{state.inputs.chapters} requested"
            )
        return {"chapters": chapters}

    async def node_report(state: OrchestrationState) -> dict:
        assert state.premise and state.outline and state.chapters
        return {"report": render_report(state.premise, state.outline, state.chapters)}

    g = StateGraph(OrchestrationState)
    g.add_node("premise", node_premise)
    g.add_node("outline", node_outline)
    g.add_node("chapters", node_chapters)
    g.add_node("report", node_report)
    g.set_entry_point("premise")
    g.add_edge("premise", "outline")
    g.add_edge("outline", "chapters")
    g.add_edge("chapters", "report")
    g.add_edge("report", END)
    return g.compile()


async def run_pipeline(inputs: UserInputs, caller: StructuredCaller) -> OrchestrationState:
    state = OrchestrationState(inputs=inputs, context=build_context(inputs))
    graph = build_graph(caller)
    try:
        logger.info("Starting outline pipeline")
        final_state = await graph.ainvoke(state)
    except Exception as e:
        logger.error(f"Pipeline failed: {str(e)}")
        raise

    # LangGraph hands back a dict of channel values
    if hasattr(final_state, "get"):
        final_state = OrchestrationState(
            inputs=final_state.get("inputs", state.inputs),
            context=final_state.get("context", state.context),
            premise=final_state.get("premise"),
            outline=final_state.get("outline"),
            chapters=final_state.get("chapters"),
            report=final_state.get("report"),
        )
    logger.info("Outline pipeline completed")
    return final_state
