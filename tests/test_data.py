from __future__ import annotations

import logging

import pytest

from epidash.catalog import build_catalog
from epidash.data import ScenarioStore, SourceLoadError, load_scenario, read_table
from epidash.ui.data import load_all, reload_all


DYNAMICS_CSV = (
    "day_mean,covid_symptomatic_child_mean,covid_symptomatic_adult_mean\n"
    "0,1.5,2\n"
    ",,\n"
    "1,2.5,3\n"
)
WEEKLY_CSV = (
    "covid_hospitalized_child_weekly_mean,covid_hospitalized_child_weekly_ci_lower\n"
    "1,0.5\n"
)


@pytest.fixture
def data_dir(tmp_path):
    (tmp_path / "dynamics_df_base.csv").write_text(DYNAMICS_CSV)
    (tmp_path / "weekly_hosp_df_base.csv").write_text(WEEKLY_CSV)
    (tmp_path / "dynamics_df_contact_10.csv").write_text(DYNAMICS_CSV)
    # test_covid_5 has no files at all
    return tmp_path


def test_read_table_drops_blank_rows_and_detects_numbers(data_dir):
    df = read_table(str(data_dir / "dynamics_df_base.csv"))
    assert len(df) == 2
    assert df["covid_symptomatic_child_mean"].tolist() == [1.5, 2.5]
    assert df["day_mean"].dtype.kind == "f"


def test_read_table_missing_source(tmp_path):
    with pytest.raises(SourceLoadError):
        read_table(str(tmp_path / "nope.csv"))


def test_read_table_unparseable_source(tmp_path):
    empty = tmp_path / "empty.csv"
    empty.write_text("")
    with pytest.raises(SourceLoadError):
        read_table(str(empty))


def test_store_load_isolates_failures(data_dir, caplog):
    catalog = build_catalog(
        ["dynamics_df_base", "dynamics_df_contact_10", "dynamics_df_test_covid_5"], data_dir=data_dir
    )
    store = ScenarioStore()
    with caplog.at_level(logging.WARNING):
        store.load(catalog)

    assert store.loading is False
    assert sorted(store.dynamics) == ["base", "contact_10"]
    assert "test_covid_5" not in store.weekly
    assert len(store.errors) == 1
    assert store.errors[0].startswith("COVID Testing 5%: ")
    assert store.weekly["base"] is not None and len(store.weekly["base"]) == 1
    # optional weekly file missing is not an error
    assert store.weekly["contact_10"] is None
    assert store.rows("test_covid_5") is None
    assert store.available(["test_covid_5", "contact_10", "base"]) == ["contact_10", "base"]


def test_store_reload_replaces_results(data_dir):
    catalog = build_catalog(["dynamics_df_base"], data_dir=data_dir)
    store = ScenarioStore().load(catalog)
    assert list(store.dynamics) == ["base"]
    (data_dir / "dynamics_df_base.csv").unlink()
    store.load(catalog)
    assert store.dynamics == {}
    assert len(store.errors) == 1


def test_load_scenario_never_raises(tmp_path):
    catalog = build_catalog(["dynamics_df_base"], data_dir=tmp_path)
    result = load_scenario(catalog.get("base"))
    assert result.dynamics is None
    assert result.error.startswith("Baseline: ")


def test_empty_catalog_loads_nothing():
    store = ScenarioStore().load(build_catalog([]))
    assert store.dynamics == {} and store.errors == [] and store.loading is False


def test_reload_picks_up_files_added_after_failed_load(tmp_path):
    loaded = load_all(tmp_path)
    assert loaded.store.dynamics == {}
    assert loaded.errors

    (tmp_path / "dynamics_df_base.csv").write_text(DYNAMICS_CSV)
    (tmp_path / "dynamics_df_contact_15.csv").write_text(DYNAMICS_CSV)
    same = reload_all(loaded)
    assert same is loaded
    assert sorted(loaded.store.dynamics) == ["base", "contact_15"]
    assert loaded.errors == []
    assert loaded.catalog.get("contact_15").contact_reduction_percent == 15
