from __future__ import annotations
import streamlit as st
from epidash.columns import AGES, age_label
from epidash.plots import comparison_figure
from epidash.series import build_age_series, merge_by_day
from epidash.ui.state import LoadedScenarios, ViewControls

__all__ = ["render_age_breakdown"]

def render_age_breakdown(loaded: LoadedScenarios, ctr: ViewControls):
    with st.expander("Age group breakdown", expanded=False):
        if not ctr.scenario_keys:
            st.info("No scenario data.")
            return
        names = {k: loaded.catalog.get(k).short_label for k in ctr.scenario_keys}
        colors = {k: loaded.catalog.get(k).display.color for k in ctr.scenario_keys}
        cols = st.columns(2)
        for i, age in enumerate(AGES):
            merged = merge_by_day(
                (k, build_age_series(loaded.store.rows(k), ctr.disease, ctr.metric, age)) for k in ctr.scenario_keys
            )
            if merged.empty:
                continue
            with cols[i % 2]:
                st.plotly_chart(
                    comparison_figure(merged, names, colors, f"{age_label(age)} · {ctr.disease.upper()}"),
                    use_container_width=True,
                    config={"displaylogo": False},
                )
