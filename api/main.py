import os
import logging
import logging.config
from typing import List

import yaml
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.schemas import (
    EmphasisSchema,
    HighlightSchema,
    MergedHighlightSchema,
    MergeRequest,
    MergeResponse,
    PressRequest,
    PressResponse,
    RunsRequest,
    RunsResponse,
    SegmentSchema,
    SegmentsRequest,
    SegmentsResponse,
    TextRunSchema,
)
from textruns.cache import ResultCache
from textruns.errors import TextRunsError
from textruns.models import Emphasis, Highlight
from textruns.pipeline import render_text
from textruns.policy import PolicyError, RenderPolicy, load_policy
from textruns.press import find_pressed_highlight
from textruns.render_html import runs_to_html


def setup_logging():
    cfg_path = os.path.join("configs", "logging.yaml")
    if os.path.exists(cfg_path):
        try:
            with open(cfg_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
            os.makedirs("logs", exist_ok=True)
            logging.config.dictConfig(config)
        except Exception as e:
            print(f"[logging] Failed to load logging.yaml: {e}")
            logging.basicConfig(level=logging.INFO)
    else:
        logging.basicConfig(level=logging.INFO)


setup_logging()
logger = logging.getLogger("api")

app = FastAPI(
    title="Text Runs",
    version="0.1.0",
    description="Partition text into styled runs from highlight and emphasis spans.",
)

origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:8501",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

CONFIG_DIR = "configs"
DEFAULT_POLICY_PATH = os.path.join(CONFIG_DIR, "render.yaml")

policy = load_policy(DEFAULT_POLICY_PATH) if os.path.exists(DEFAULT_POLICY_PATH) else RenderPolicy()

# Segments are recomputed on every render; share one value-keyed memo
cache = ResultCache(maxsize=policy.cache_size)


def _policy_path(name: str) -> str:
    """Resolve a client-supplied policy name to a file inside configs/."""
    root = os.path.realpath(CONFIG_DIR)
    path = os.path.realpath(name)
    if os.path.commonpath([root, path]) != root:
        raise HTTPException(status_code=400, detail=f"Policy must live under {CONFIG_DIR}/")
    if not os.path.isfile(path):
        raise HTTPException(status_code=404, detail=f"Unknown policy {name}")
    return path


@app.exception_handler(TextRunsError)
def span_error_handler(request: Request, exc: TextRunsError) -> JSONResponse:
    logger.info("Rejected %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


@app.exception_handler(PolicyError)
def policy_error_handler(request: Request, exc: PolicyError) -> JSONResponse:
    logger.warning("Bad render policy for %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "error": "PolicyError"},
    )


def _to_highlights(items: List[HighlightSchema]) -> List[Highlight]:
    return [Highlight(id=h.id, start=h.start, end=h.end, color=h.color) for h in items]


def _to_emphases(items: List[EmphasisSchema]) -> List[Emphasis]:
    return [Emphasis(start=e.start, end=e.end, style=e.style, id=e.id) for e in items]


@app.post("/merge", response_model=MergeResponse)
def merge(req: MergeRequest) -> MergeResponse:
    merged = cache.merge(_to_highlights(req.highlights), policy.default_color)
    return MergeResponse(
        highlights=[
            MergedHighlightSchema(start=h.start, end=h.end, id=h.id, color=h.color)
            for h in merged
        ]
    )


@app.post("/segments", response_model=SegmentsResponse)
def segments(req: SegmentsRequest) -> SegmentsResponse:
    result = cache.compose(
        _to_highlights(req.highlights), _to_emphases(req.emphases), policy.default_color
    )
    return SegmentsResponse(
        segments=[
            SegmentSchema(
                start=s.start,
                end=s.end,
                is_highlight=s.is_highlight,
                highlight_color=s.highlight_color,
                highlight_id=s.highlight_id,
                style=s.emphasis_style.to_mapping(),
            )
            for s in result
        ]
    )


@app.post("/runs", response_model=RunsResponse)
def runs(req: RunsRequest) -> RunsResponse:
    logger.info("Received /runs request")
    text_runs = render_text(
        text=req.text,
        highlights=_to_highlights(req.highlights),
        emphases=_to_emphases(req.emphases),
        policy_path=_policy_path(req.policy_name),
        cache=cache,
    )
    run_schemas = [
        TextRunSchema(
            text=r.text,
            start=r.start,
            end=r.end,
            is_highlight=r.is_highlight,
            highlight_color=r.highlight_color,
            highlight_id=r.highlight_id,
            style=r.style.to_mapping(),
            font_style=r.style.to_font_style(),
        )
        for r in text_runs
    ]
    html = runs_to_html(text_runs) if req.include_html else None
    return RunsResponse(runs=run_schemas, html=html)


@app.post("/press", response_model=PressResponse)
def press(req: PressRequest) -> PressResponse:
    press_policy = load_policy(_policy_path(req.policy_name))
    pressed = find_pressed_highlight(
        _to_highlights(req.highlights),
        req.range_start,
        req.range_end,
        tolerance=press_policy.press_tolerance,
        default_color=press_policy.default_color,
    )
    return PressResponse(id=pressed)
