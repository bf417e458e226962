"""Rayleigh Sky Simulator: Streamlit app for sky color versus sun angle."""

import html
import logging
import os

import streamlit as st
from dotenv import load_dotenv
from streamlit_js_eval import streamlit_js_eval

load_dotenv()

from rayleighsky.canvas_view import (  # noqa: E402
    MEASURE_SURFACE_JS,
    apply_surface,
    show_sky_frame,
)
from rayleighsky.explanation import request_explanation  # noqa: E402
from rayleighsky.i18n import t  # noqa: E402
from rayleighsky.physics import WAVELENGTH_BANDS  # noqa: E402
from rayleighsky.renderers.plotly_bars import render_intensity_chart  # noqa: E402
from rayleighsky.state import SkyState  # noqa: E402

logging.basicConfig(
    level=os.environ.get("RAYLEIGHSKY_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# --- Language detection (browser-first via streamlit-js-eval) ---
# navigator.language is read once and cached in session_state.
# On the first run the JS call returns None; the rerun triggered by
# streamlit_js_eval fills it in, at which point _lang is set correctly.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "ko" if _browser_lang.lower().startswith("ko") else "en"

_lang: str = st.session_state.get("lang", "en")

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="☀",
    layout="centered",
    initial_sidebar_state="collapsed",
)

# --- Session state initialization ---
# SkyState is the single mutable holder; everything below reads snapshots of it.
if "sky" not in st.session_state:
    st.session_state.sky = SkyState()
if "explanation" not in st.session_state:
    st.session_state.explanation = None

sky: SkyState = st.session_state.sky

# --- Render surface (resize trigger) ---
# [content width, innerWidth, devicePixelRatio] of the main block container;
# None until the browser answers. Container resizes push a new value and rerun.
_surface = streamlit_js_eval(js_expressions=MEASURE_SURFACE_JS, key="_surface", height=0)
apply_surface(sky, _surface)


def _on_angle_change() -> None:
    """Slider callback: store the angle, never draw here."""
    if sky.set_sun_angle(st.session_state.sun_angle_slider):
        # Prose about the previous angle would now be misleading
        st.session_state.explanation = None


# --- Theme CSS (static) ---
st.markdown(
    """
    <style>
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #020617 !important;
        color: #e2e8f0;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    /* iframes used only for JS evaluation */
    iframe[src*="streamlit_js_eval"] { display: none !important; }
    .app-header {
        display: flex; justify-content: space-between; align-items: center;
        border-bottom: 1px solid #1e293b; padding: 1rem 0; margin-bottom: 1.5rem;
    }
    .app-header h1 { color: #ffffff; font-size: 1.25rem; margin: 0; padding: 0; }
    .app-header p { color: #94a3b8; font-size: 0.75rem; margin: 0; }
    .app-header a { color: #60a5fa; font-size: 0.85rem; text-decoration: none; }
    .phase-badge {
        display: inline-block; background: rgba(0,0,0,0.5);
        border: 1px solid rgba(255,255,255,0.1); border-radius: 999px;
        padding: 0.2rem 0.8rem; font-family: monospace; font-size: 0.75rem;
        float: right; margin-bottom: 0.4rem;
    }
    .hint { text-align: center; color: #64748b; font-style: italic; font-size: 0.85rem; }
    .slider-ends {
        display: flex; justify-content: space-between;
        color: #94a3b8; font-size: 0.85rem; font-weight: 500;
    }
    .slider-ends .noon { color: #ffffff; font-weight: 700; }
    .angle-readout {
        text-align: center; font-size: 1.5rem; font-weight: 700; color: #60a5fa;
    }
    .panel {
        background: rgba(30,41,59,0.5); border: 1px solid #334155;
        border-radius: 12px; padding: 1.2rem 1.4rem; margin-bottom: 1rem;
    }
    .panel h3 { color: #e2e8f0; font-size: 1.05rem; margin-top: 0; }
    .stat-row {
        display: flex; justify-content: space-between; align-items: center;
        background: #0f172a; border-radius: 8px; padding: 0.7rem; margin-bottom: 0.6rem;
    }
    .stat-row .label { color: #94a3b8; }
    .stat-row .value { font-family: monospace; font-size: 1.25rem; }
    .stat-row .value.path { color: #fb923c; }
    .stat-row .note { color: #64748b; font-size: 0.75rem; text-align: right; }
    .chart-caption { color: #94a3b8; font-size: 0.75rem; text-align: center; }
    .explanation-text {
        background: rgba(2,6,23,0.5); border: 1px solid rgba(99,102,241,0.2);
        border-radius: 8px; padding: 1rem; color: #e2e8f0;
        font-size: 0.9rem; line-height: 1.7;
    }
    [data-testid="stButton"] button {
        background-color: #4f46e5 !important; color: #ffffff !important;
        border: none !important; border-radius: 8px !important; font-weight: 600;
    }
    [data-testid="stButton"] button:hover { background-color: #6366f1 !important; }
    </style>
    """,
    unsafe_allow_html=True,
)

# --- Header ---
st.markdown(
    f"""
    <div class="app-header">
      <div>
        <h1>☀ {t("page_title", _lang)}</h1>
        <p>{t("subtitle", _lang)}</p>
      </div>
      <a href="https://en.wikipedia.org/wiki/Rayleigh_scattering" target="_blank" rel="noreferrer">
        ⓘ {t("physics_reference", _lang)}
      </a>
    </div>
    """,
    unsafe_allow_html=True,
)

snapshot = sky.snapshot()

# --- Simulation canvas ---
# One paint opportunity per script run.
st.markdown(
    f"<div class='phase-badge'>"
    f"{t('badge_time', _lang).format(phase=t('phase_' + snapshot.phase, _lang))}</div>",
    unsafe_allow_html=True,
)
show_sky_frame(st, sky, _lang)
st.markdown(f"<p class='hint'>{t('hint_slider', _lang)}</p>", unsafe_allow_html=True)

# --- Controls ---
st.markdown(
    f"<div class='slider-ends'><span>{t('slider_sunrise', _lang)}</span>"
    f"<span class='noon'>{t('slider_noon', _lang)}</span>"
    f"<span>{t('slider_sunset', _lang)}</span></div>",
    unsafe_allow_html=True,
)
st.slider(
    t("slider_label", _lang),
    min_value=0.0,
    max_value=180.0,
    value=sky.sun_angle,
    step=0.5,
    key="sun_angle_slider",
    on_change=_on_angle_change,
    label_visibility="collapsed",
)
st.markdown(
    f"<div class='angle-readout'>{snapshot.sun_angle:.1f}°</div>",
    unsafe_allow_html=True,
)

# --- Data & stats ---
col_chart, col_stats = st.columns(2)
with col_chart:
    st.markdown(
        f"<div class='panel'><h3>{t('chart_title', _lang)}</h3></div>",
        unsafe_allow_html=True,
    )
    st.plotly_chart(
        render_intensity_chart(WAVELENGTH_BANDS),
        use_container_width=True,
        config={"displayModeBar": False},
    )
    st.markdown(
        f"<p class='chart-caption'>{t('chart_caption', _lang)}</p>",
        unsafe_allow_html=True,
    )
with col_stats:
    st.markdown(
        f"""
        <div class="panel">
          <h3>{t("conditions_title", _lang)}</h3>
          <div class="stat-row">
            <span class="label">{t("label_elevation", _lang)}</span>
            <span class="value">{snapshot.effective_angle:.1f}°</span>
          </div>
          <div class="stat-row">
            <span class="label">{t("label_path", _lang)}</span>
            <div>
              <div class="value path">{snapshot.path_length:.2f}x</div>
              <div class="note">{t("label_path_note", _lang)}</div>
            </div>
          </div>
        </div>
        """,
        unsafe_allow_html=True,
    )
    st.latex(r"I \propto \frac{1}{\lambda^4}")
    st.markdown(
        f"<p class='chart-caption'>{t('formula_caption', _lang)}</p>",
        unsafe_allow_html=True,
    )

# --- AI explanation ---
st.markdown(
    f"<div class='panel'><h3>🤖 {t('ai_title', _lang)}</h3>"
    f"<p style='color:#cbd5e1;font-size:0.9rem;'>{t('ai_intro', _lang)}</p></div>",
    unsafe_allow_html=True,
)

explanation = st.session_state.explanation
if explanation is not None and not explanation.matches(snapshot):
    st.session_state.explanation = explanation = None

if explanation is None:
    clicked = st.button(t("btn_explain", _lang), key="explain_btn")
else:
    st.markdown(
        f"<div class='explanation-text'>{html.escape(explanation.text)}</div>",
        unsafe_allow_html=True,
    )
    clicked = st.button(t("btn_refresh", _lang), key="refresh_btn")

# The spinner blocks this run, so only one request is ever outstanding
if clicked:
    with st.spinner(t("loading_explanation", _lang)):
        st.session_state.explanation = request_explanation(snapshot, lang=_lang)
    st.rerun()

# --- Instructions ---
st.divider()
st.markdown(f"#### {t('instructions_title', _lang)}")
st.markdown(t("instructions_body", _lang))
