import sys
from pathlib import Path

import streamlit as st
import yaml

# Make project root importable (so textruns/ works)
ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from textruns.cache import ResultCache
from textruns.detect_regex import find_term_highlights
from textruns.errors import TextRunsError
from textruns.models import Emphasis, Highlight
from textruns.pipeline import build_runs
from textruns.policy import load_policy
from textruns.render_html import runs_to_html


@st.cache_resource
def get_cache(maxsize):
    return ResultCache(maxsize=maxsize)


def parse_spans(raw: str, kind: str):
    """Parse a YAML list of span mappings typed into the sidebar."""
    data = yaml.safe_load(raw) or []
    if not isinstance(data, list):
        raise ValueError(f"{kind} must be a YAML list")
    if kind == "highlights":
        return [Highlight(**item) for item in data]
    return [Emphasis(**item) for item in data]


st.set_page_config(
    page_title="Text Runs – Highlight & Emphasis Preview",
    layout="wide",
)

st.title("Text Runs – Highlight & Emphasis Preview")
st.caption("Merged highlights • Layered emphases • Ordered text runs")

# --------------------------------------------------------------------
# Sidebar configuration
# --------------------------------------------------------------------
st.sidebar.header("Settings")

policy_path = st.sidebar.text_input(
    "Render policy path",
    value="configs/render.yaml",
    help="Path to the YAML render policy.",
)

policy_ok = True
policy = None
try:
    policy = load_policy(policy_path)
except Exception as e:
    policy_ok = False
    st.sidebar.error(f"Failed to load policy: {e}")

search_terms = st.sidebar.text_input(
    "Search terms (comma separated)",
    value="",
    help="Each match becomes a highlight.",
)

show_run_table = st.sidebar.checkbox("Show run table", value=True)

# --------------------------------------------------------------------
# Input
# --------------------------------------------------------------------
default_text = (
    "The quick brown fox jumps over the lazy dog.\n"
    "Pack my box with five dozen liquor jugs."
)

user_text = st.text_area("Input text", value=default_text, height=150)

col_h, col_e = st.columns(2)
with col_h:
    raw_highlights = st.text_area(
        "Highlights (YAML list)",
        value="- {id: h1, start: 4, end: 15}\n- {id: h2, start: 10, end: 19, color: '#9be9a8'}",
        height=150,
    )
with col_e:
    raw_emphases = st.text_area(
        "Emphases (YAML list, later entries win)",
        value="- {start: 16, end: 25, style: [bold]}\n- {start: 35, end: 43, style: {italic: true, color: '#c00'}}",
        height=150,
    )

if not policy_ok:
    st.error("Cannot render because the policy failed to load. Check sidebar.")
    st.stop()

try:
    highlights = parse_spans(raw_highlights, "highlights")
    emphases = parse_spans(raw_emphases, "emphases")
    if search_terms.strip():
        highlights += find_term_highlights(user_text, search_terms.split(","))
    runs = build_runs(
        user_text,
        highlights,
        emphases,
        policy=policy,
        cache=get_cache(policy.cache_size),
    )
except (TextRunsError, ValueError, TypeError, yaml.YAMLError) as e:
    st.error(f"Invalid spans: {e}")
    st.stop()

st.subheader("Preview")
st.markdown(runs_to_html(runs), unsafe_allow_html=True)

if show_run_table and runs:
    st.markdown("### Text runs")
    rows = []
    for r in runs:
        rows.append(
            {
                "start": r.start,
                "end": r.end,
                "text": r.text,
                "highlight": r.highlight_id if r.is_highlight else "",
                "color": r.highlight_color or "",
                "style": r.style.to_css(),
            }
        )
    st.dataframe(rows, use_container_width=True)

stats = get_cache(policy.cache_size).stats()
st.caption(f"Segment cache: {stats.hits} hits, {stats.misses} misses, {stats.size} entries")
