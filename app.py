"""Streamlit orchestrator app.

Responsibilities are delegated to dedicated modules under `epidash.ui`:

  epidash.ui.data.load_all           -> catalog discovery & concurrent CSV loading
  epidash.ui.controls.build_controls -> sidebar inputs & parameter exclusivity
  epidash.ui.sections.*              -> individual chart sections

The goal is to keep this file thin: sequencing, light session state, and high
level layout only. Scenario resolution and series transforms live in the
`epidash` package for testability.

Run: streamlit run app.py
"""
from __future__ import annotations

import os

import streamlit as st

from epidash.ui.data import load_all, reload_all
from epidash.ui.controls import build_controls, MODE_MATCH
from epidash.ui.state import LoadedScenarios, ViewControls
from epidash.ui.sections import (
    render_summary,
    render_age_timeseries,
    render_uncertainty,
    render_weekly_hospital,
    render_daily_hospital,
    render_age_breakdown,
)

DATA_DIR = os.environ.get("EPIDASH_DATA_DIR")  # None -> epidash.paths.default_data_dir()

st.set_page_config(page_title="School Disease Simulation Dashboard", layout="wide")

st.title("School Disease Simulation Dashboard")
st.caption("Explore intervention parameters, uncertainty bands, and hospitalization trends.")

if "_loaded" not in st.session_state:
    with st.spinner("Loading data..."):
        st.session_state["_loaded"] = load_all(DATA_DIR)
ld: LoadedScenarios = st.session_state["_loaded"]

if st.sidebar.button("Reload data"):
    with st.spinner("Loading data..."):
        reload_all(ld)
    st.rerun()

if ld.errors:
    st.warning("Some datasets did not load: " + " · ".join(ld.errors))
if not ld.store.dynamics:
    st.error(f"No scenario data could be loaded from {ld.data_dir}.")
    st.stop()

controls: ViewControls = build_controls(ld)

matched = ld.catalog.get(controls.resolved_key)
st.info(f"Current selections align best with: **{matched.short_label if matched else 'Scenario data pending'}**")
if controls.mode == MODE_MATCH and not controls.scenario_keys:
    st.caption("The matched scenario did not load; pick another scenario in the sidebar.")

render_summary(ld, controls)
render_age_timeseries(ld, controls)
render_uncertainty(ld, controls)
render_weekly_hospital(ld, controls)
render_daily_hospital(ld, controls)
render_age_breakdown(ld, controls)

st.caption(f"Data directory: {ld.data_dir} · {len(ld.store.dynamics)}/{len(ld.catalog)} scenarios loaded")
