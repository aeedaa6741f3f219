"""
streamlit_app.py
----------------
Browser front-end for the tweet segmenter.
Wraps split_pipeline() from app.py and previews the resulting thread.

Run with:
    streamlit run streamlit_app.py
"""

import sys
from pathlib import Path

import streamlit as st

# Make project root importable
sys.path.insert(0, str(Path(__file__).parent))

from app import (
    split_pipeline,
    resolve_measurer,
    BUDGET,
    PREFIX_TEMPLATE,
    SUFFIX_TEMPLATE,
    MEASURER,
)
from segmenter.measure import MEASURERS
from validator.thread_validator import ValidationError

# ── Page config ────────────────────────────────────────────────────────────────

st.set_page_config(
    page_title="Tweet Segmenter",
    page_icon="🧵",
    layout="centered",
)

# ── Sidebar ────────────────────────────────────────────────────────────────────

with st.sidebar:
    st.header("⚙️ Configuration")
    budget       = st.number_input("Budget", min_value=10, max_value=10000, value=BUDGET)
    prefix       = st.text_input("Prefix template", value=PREFIX_TEMPLATE)
    use_suffix   = st.checkbox("Append suffix", value=False)
    suffix       = st.text_input("Suffix template", value=SUFFIX_TEMPLATE, disabled=not use_suffix)
    measurer     = st.selectbox(
        "Length measurer",
        options=sorted(MEASURERS),
        index=sorted(MEASURERS).index(MEASURER),
    )
    st.markdown("---")
    st.caption("Placeholders: {{current}} and {{total}}.")

# ── Main UI ────────────────────────────────────────────────────────────────────

st.title("🧵 Tweet Segmenter")
st.caption("Split text into numbered chunks that fit a short-message budget.")

text = st.text_area("Text", height=240, placeholder="Paste the text to split…")

if st.button("Split", type="primary", disabled=not text.strip()):
    measure = resolve_measurer(measurer)
    try:
        response = split_pipeline(
            text,
            budget          = int(budget),
            prefix_template = prefix,
            suffix_template = suffix,
            use_suffix      = use_suffix,
            measure         = measure,
        )
    except ValidationError as exc:
        st.error(f"**Validation error:** {exc}")
        st.stop()

    st.subheader(f"Thread ({response['count']} chunks)")
    overflow = set(response["overflow"])
    for index, chunk in enumerate(response["chunks"]):
        length = measure(chunk)
        with st.container(border=True):
            st.write(chunk)
            if index in overflow:
                st.warning(f"{length}/{response['budget']} - exceeds the budget")
            else:
                st.caption(f"{length}/{response['budget']}")

    with st.expander("Raw response"):
        st.json(response)
