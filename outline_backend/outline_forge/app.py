import logging
import traceback

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

# Ensure .env is loaded before the OpenAI caller is created
from .settings import Settings, load_settings
from .context import build_user_inputs
from .errors import ConfigurationError, MethodNotAllowedError, OutlineForgeError
from .forms import extract_form
from .llm import OpenAIStructuredCaller, StructuredCaller
from .orchestrator import run_pipeline

logger = logging.getLogger(__name__)

SETTINGS = load_settings()

app = FastAPI(title="OutlineForge Backend")
app.state.settings = SETTINGS
app.state.caller = OpenAIStructuredCaller(SETTINGS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=SETTINGS.allowed_origins or ["*"],
    allow_credentials=True,
    allow_methods=["POST", "GET", "OPTIONS"],
    allow_headers=["*"],
)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_caller(request: Request) -> StructuredCaller:
    return request.app.state.caller


@app.exception_handler(OutlineForgeError)
async def outline_error_handler(request: Request, exc: OutlineForgeError):
    logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc}")
    return PlainTextResponse(str(exc), status_code=exc.status_code)


@app.get("/health")
def health(settings: Settings = Depends(get_settings)):
    keys_ok = settings.has_key()
    logger.info(f"Health check: API key present = {keys_ok}")
    return {"ok": True, "has_key": keys_ok, "model": settings.openai_model}


@app.api_route(
    "/api/outline",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"],
)
async def outline(
    request: Request,
    settings: Settings = Depends(get_settings),
    caller: StructuredCaller = Depends(get_caller),
):
    if request.method != "POST":
        raise MethodNotAllowedError()
    if not settings.has_key():
        raise ConfigurationError("Missing OPENAI_API_KEY on server (set it in the environment).")

    try:
        form = await extract_form(request)
        inputs = build_user_inputs(form)
        logger.info(
            f"Outline request: genre={inputs.genre!r} pacing={inputs.pacing!r} "
            f"chapters={inputs.chapters} seed={len(inputs.seed)} chars"
        )
        result = await run_pipeline(inputs, caller)
    except OutlineForgeError:
        raise
    except Exception:
        tb = traceback.format_exc()
        logger.error(f"Full traceback: {tb}")
        return PlainTextResponse(tb, status_code=500)

    return PlainTextResponse(result.report or "", status_code=200)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
