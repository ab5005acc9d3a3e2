from __future__ import annotations
import streamlit as st
from epidash.series import summary_stats
from epidash.ui.state import LoadedScenarios, ViewControls

__all__ = ["render_summary"]

def render_summary(loaded: LoadedScenarios, ctr: ViewControls):
    noun = "infections" if ctr.metric == "symptomatic" else "recoveries"
    st.subheader(f"Summary statistics · {ctr.disease.upper()} · {noun.capitalize()}")
    if not ctr.scenario_keys:
        st.info("No data available for this scenario yet. Please adjust the selections.")
        return
    cols = st.columns(len(ctr.scenario_keys))
    for col, key in zip(cols, ctr.scenario_keys):
        desc = loaded.catalog.get(key)
        stats = summary_stats(loaded.store.rows(key), ctr.disease, ctr.metric)
        with col:
            st.metric(f"{desc.short_label} [{desc.display.badge}]" if desc else key, f"{stats.peak:,}",
                      help=f"Peak {noun}")
            st.caption(f"Average: {stats.avg:,} · Total: {stats.total:,}")
