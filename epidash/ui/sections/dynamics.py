from __future__ import annotations
import streamlit as st
from epidash.plots import age_share_figure, age_timeseries_figure, band_figure
from epidash.series import build_ci_band, max_value, prepare_time_series, share_by_age
from epidash.ui.state import LoadedScenarios, ViewControls

__all__ = ["render_age_timeseries", "render_uncertainty"]

def _show(fig):
    st.plotly_chart(fig, use_container_width=True, config={"displaylogo": False})

def render_age_timeseries(loaded: LoadedScenarios, ctr: ViewControls):
    noun = "Infections" if ctr.metric == "symptomatic" else "Recoveries"
    # shared y-axis so scenarios are visually comparable
    y_max = max([max_value(loaded.store.rows(k), ctr.disease, ctr.metric) for k in ctr.scenario_keys] or [100])
    for key in ctr.scenario_keys:
        desc = loaded.catalog.get(key)
        ts = prepare_time_series(loaded.store.rows(key), ctr.disease, ctr.metric)
        if ts.empty:
            continue
        title = f"{ctr.disease.upper()} {noun} · {desc.short_label if desc else key} · Time series by age group"
        _show(age_timeseries_figure(ts, title, y_max=y_max))
    if len(ctr.scenario_keys) > 1:
        with st.expander("Scenario comparison · cumulative burden by age", expanded=False):
            cols = st.columns(len(ctr.scenario_keys))
            for col, key in zip(cols, ctr.scenario_keys):
                shares = share_by_age(loaded.store.rows(key), ctr.disease, ctr.metric)
                if shares.empty:
                    continue
                desc = loaded.catalog.get(key)
                with col:
                    _show(age_share_figure(shares, desc.short_label if desc else key))

def render_uncertainty(loaded: LoadedScenarios, ctr: ViewControls):
    with st.expander("Uncertainty bands (95% CI)", expanded=True):
        if not ctr.scenario_keys:
            st.info("No scenario data.")
            return
        cols = st.columns(min(2, len(ctr.scenario_keys)))
        for i, key in enumerate(ctr.scenario_keys):
            band = build_ci_band(loaded.store.rows(key), ctr.disease, ctr.metric)
            if band.empty:
                continue
            desc = loaded.catalog.get(key)
            with cols[i % len(cols)]:
                _show(band_figure(band, f"{desc.short_label} · 95% CI", desc.display.color))
        st.caption("Bands add the per-age 2.5% and 97.5% columns; they are not a combined interval.")
