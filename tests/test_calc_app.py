"""Tests for the form and display helpers behind the Streamlit pages."""

import math

import pytest

import mech_calc_app as app


def test_coerce_number_valid():
    assert app.coerce_number("12.5") == 12.5
    assert app.coerce_number(" 3 ") == 3.0
    assert app.coerce_number("-4") == -4.0
    assert app.coerce_number(7) == 7.0


def test_coerce_number_invalid_defaults_to_zero():
    assert app.coerce_number("") == 0.0
    assert app.coerce_number("abc") == 0.0
    assert app.coerce_number("nan") == 0.0
    assert app.coerce_number(None) == 0.0


def test_coerce_number_reads_leading_number():
    assert app.coerce_number("12abc") == 12.0
    assert app.coerce_number("5 m/s") == 5.0
    assert app.coerce_number("1_000") == 1.0
    assert app.coerce_number(".5") == 0.5
    assert app.coerce_number("1e3x") == 1000.0
    assert app.coerce_number("1e") == 1.0


def test_coerce_number_infinity_literal_only():
    assert app.coerce_number("Infinity") == math.inf
    assert app.coerce_number("-Infinity") == -math.inf
    assert app.coerce_number("inf") == 0.0
    assert app.coerce_number("-inf") == 0.0


def test_vav_turndown_edit_updates_min_airflow():
    form = dict(app.PAGE_DEFAULTS["vav_form"])
    new = app.update_vav_form(form, "turndown_ratio", 40)
    assert new["min_airflow"] == pytest.approx(200)
    assert new["turndown_ratio"] == 40
    assert form["min_airflow"] == 125


def test_vav_min_airflow_edit_updates_turndown():
    form = dict(app.PAGE_DEFAULTS["vav_form"])
    new = app.update_vav_form(form, "min_airflow", 150)
    assert new["turndown_ratio"] == pytest.approx(30)


def test_vav_design_edit_keeps_turndown():
    form = dict(app.PAGE_DEFAULTS["vav_form"])
    new = app.update_vav_form(form, "design_airflow", 1000)
    assert new["turndown_ratio"] == 25
    assert new["min_airflow"] == pytest.approx(250)


def test_vav_static_pressure_edit_touches_nothing_else():
    form = dict(app.PAGE_DEFAULTS["vav_form"])
    new = app.update_vav_form(form, "static_pressure", 1.5)
    assert new == dict(form, static_pressure=1.5)


def test_vav_min_airflow_with_zero_design():
    form = dict(app.PAGE_DEFAULTS["vav_form"], design_airflow=0.0)
    new = app.update_vav_form(form, "min_airflow", 100)
    assert math.isinf(new["turndown_ratio"])


def test_slider_turndown_snaps_and_clamps():
    assert app.slider_turndown(25) == 25
    assert app.slider_turndown(33.3) == 35
    assert app.slider_turndown(3) == app.TURNDOWN_MIN
    assert app.slider_turndown(90) == app.TURNDOWN_MAX
    assert app.slider_turndown(math.inf) == app.TURNDOWN_MIN


def test_fitting_rows_add_remove_update():
    rows = [dict(r) for r in app.PAGE_DEFAULTS["pump_fittings"]]
    rows = app.add_fitting_row(rows)
    assert rows[-1] == {"id": "3", "type": "elbow_90", "count": 1}

    rows = app.update_fitting_row(rows, "3", "type", "tee")
    rows = app.update_fitting_row(rows, "3", "count", 2)
    assert rows[-1] == {"id": "3", "type": "tee", "count": 2}

    rows = app.remove_fitting_row(rows, "1")
    assert [r["id"] for r in rows] == ["2", "3"]
    assert app.add_fitting_row(rows)[-1]["id"] == "4"
    assert app.add_fitting_row([])[0]["id"] == "1"


def test_page_defaults_not_mutated_by_row_edits():
    rows = app.PAGE_DEFAULTS["pump_fittings"]
    app.update_fitting_row(rows, "1", "count", 99)
    app.remove_fitting_row(rows, "1")
    assert rows[0]["count"] == 4
    assert len(rows) == 2


def test_friction_loss_rate():
    assert app.friction_loss_rate({"friction_loss": 5.0}, 50) == pytest.approx(0.1)
    assert math.isinf(app.friction_loss_rate({"friction_loss": 5.0}, 0))
    assert math.isnan(app.friction_loss_rate({"friction_loss": 0.0}, 0))


def test_fmt_value():
    assert app.fmt_value(1234.5678, 2, "Pa/m") == "1,234.57 Pa/m"
    assert app.fmt_value(0.05556, 4) == "0.0556"
    assert app.fmt_value(math.inf, 2, "m") == "inf m"


def test_routes():
    assert set(app.PAGES) == {"dashboard", "duct-sizing", "pipe-sizing", "vav-sizing", "pump-head"}
    for route, _, _ in app.CALCULATOR_CARDS:
        assert route in app.PAGES


def test_system_curve_chart_is_png():
    import mech_calcs as mc
    curve = mc.pump_system_curve(2.5, 50, 25, {"elbow_90": 4}, "copper", n_points=5)
    png = app.generate_system_curve_chart(curve, 2.5, curve[-1][1])
    assert png[:8] == b"\x89PNG\r\n\x1a\n"


def test_nav_selection_unknown_route_selects_nothing():
    assert app.nav_selection("nope") is None
    assert app.nav_selection("pump-head") == "pump-head"
    assert app.nav_selection("dashboard") == "dashboard"


def test_result_toast_reports_non_finite_results():
    import mech_calcs as mc
    ok = app.result_toast("Duct Sizing", mc.size_duct(1000, 5))
    assert "successfully" in ok
    bad = app.result_toast("Duct Sizing", mc.size_duct(1000, 0))
    assert "successfully" not in bad
    assert "non-finite" in bad
