from __future__ import annotations
import streamlit as st
from .state import LoadedScenarios, ViewControls
from epidash.catalog import BASELINE
from epidash.columns import AGES, DISEASES, age_label
from epidash.resolve import resolve_scenario
from epidash.selection import ExclusivityController

__all__ = ["build_controls", "get_controller"]

VIEWS = {"Infections (Symptomatic)": "symptomatic", "Recoveries": "recovered"}
MODE_MATCH = "Match parameters"
MODE_SINGLE = "Single scenario"
MODE_COMPARE = "Compare scenarios"

_CONTROLLER_KEY = "_selection_controller"


def get_controller() -> ExclusivityController:
    # one controller per browser session owns the parameter state
    if _CONTROLLER_KEY not in st.session_state:
        st.session_state[_CONTROLLER_KEY] = ExclusivityController()
    return st.session_state[_CONTROLLER_KEY]


def _widget_key(param_id: str) -> str:
    return f"param_{param_id}"


def _sync_widgets(controller: ExclusivityController) -> None:
    for pid, value in controller.state.items():
        st.session_state[_widget_key(pid)] = value


def _on_parameter_change(controller: ExclusivityController, param_id: str) -> None:
    controller.set_parameter(param_id, st.session_state[_widget_key(param_id)])
    _sync_widgets(controller)


def _on_reset(controller: ExclusivityController) -> None:
    controller.reset()
    _sync_widgets(controller)


def _parameter_inputs(controller: ExclusivityController) -> None:
    st.sidebar.header("Intervention parameters")
    st.sidebar.caption("Only one intervention can be active; changing one resets the others.")
    for pid, definition in controller.parameters.items():
        key = _widget_key(pid)
        if key not in st.session_state:
            st.session_state[key] = controller.state[pid]
        st.sidebar.selectbox(
            definition.label,
            definition.values,
            format_func=definition.option_label,
            key=key,
            help=definition.description,
            on_change=_on_parameter_change,
            args=(controller, pid),
        )
    st.sidebar.button("Reset parameters", on_click=_on_reset, args=(controller,))


def build_controls(loaded: LoadedScenarios) -> ViewControls:
    controller = get_controller()
    catalog = loaded.catalog
    available = loaded.store.available(d.key for d in catalog.ordered())
    labels = {k: catalog.get(k).short_label for k in available}  # type: ignore[union-attr]

    st.sidebar.header("View")
    disease = st.sidebar.radio("Disease", DISEASES, format_func=str.upper, horizontal=True)
    view = st.sidebar.radio("View type", list(VIEWS), index=0)
    mode = st.sidebar.radio("Scenario", [MODE_MATCH, MODE_SINGLE, MODE_COMPARE], index=0)

    _parameter_inputs(controller)
    resolved = resolve_scenario(controller.state, catalog, controller.parameters.values())

    if mode == MODE_SINGLE:
        chosen = st.sidebar.selectbox("Scenario data", available, format_func=lambda k: labels[k]) if available else None
        keys = [chosen] if chosen else []
    elif mode == MODE_COMPARE:
        non_base = [k for k in available if catalog.get(k).kind != BASELINE]  # type: ignore[union-attr]
        keys = st.sidebar.multiselect(
            "Scenarios to compare", available, default=non_base[:2], format_func=lambda k: labels[k]
        )
    else:
        keys = [resolved] if resolved in available else []

    hospital_age = st.sidebar.selectbox("Daily hospitalization age group", AGES, index=AGES.index("child"),
                                        format_func=age_label)

    return ViewControls(
        disease=disease,
        view=view,
        metric=VIEWS[view],
        mode=mode,
        resolved_key=resolved,
        scenario_keys=list(keys),
        hospital_age=hospital_age,
    )
