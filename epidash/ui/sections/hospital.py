from __future__ import annotations
import streamlit as st
from epidash.columns import age_label
from epidash.plots import band_figure, latest_week_figure
from epidash.series import build_daily_hospital_series, build_weekly_hospital_series, latest_week_by_age
from epidash.ui.state import LoadedScenarios, ViewControls

__all__ = ["render_weekly_hospital", "render_daily_hospital"]

def _show(fig):
    st.plotly_chart(fig, use_container_width=True, config={"displaylogo": False})

def render_weekly_hospital(loaded: LoadedScenarios, ctr: ViewControls):
    with st.expander("Weekly hospitalizations", expanded=False):
        shown = 0
        for key in ctr.scenario_keys:
            weekly_rows = loaded.store.weekly_rows(key)
            series = build_weekly_hospital_series(weekly_rows, ctr.disease)
            if series.empty:
                continue
            shown += 1
            desc = loaded.catalog.get(key)
            col1, col2 = st.columns([2, 1])
            with col1:
                _show(band_figure(series, f"{desc.short_label} · Weekly hospitalizations", desc.display.color,
                                  x_col="week", y_title="Hospitalizations"))
            with col2:
                latest = latest_week_by_age(weekly_rows, ctr.disease)
                _show(latest_week_figure(latest, "Latest week by age", desc.display.color))
        if not shown:
            st.info("No weekly hospitalization data for the selected scenarios.")

def render_daily_hospital(loaded: LoadedScenarios, ctr: ViewControls):
    with st.expander(f"Daily hospitalizations · {age_label(ctr.hospital_age)}", expanded=False):
        shown = 0
        for key in ctr.scenario_keys:
            series = build_daily_hospital_series(loaded.store.rows(key), ctr.disease, ctr.hospital_age)
            if series.empty:
                continue
            shown += 1
            desc = loaded.catalog.get(key)
            _show(band_figure(series, f"{desc.short_label} · {ctr.disease.upper()} hospitalized",
                              desc.display.color, y_title="Hospitalized"))
        if not shown:
            st.info("No daily hospitalization data for the selected scenarios.")
