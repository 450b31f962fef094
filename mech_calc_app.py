"""
Mechanical Engineering Calculators — Streamlit App
===================================================
Browser front end for the HVAC sizing calculators in mech_calcs.

Pages:    Dashboard, Duct Sizing, Pipe Sizing, VAV Box Sizing, Pump Head Loss
Routing:  sidebar navigation, mirrored in the ?page= query parameter;
          unknown routes render a Not Found page.

Deploy:   pip install -e .
          streamlit run mech_calc_app.py
"""

import io
import math
import re

import pandas as pd
import streamlit as st

import mech_calcs as mc
from calc_logging import get_logger

log = get_logger("app")

# ─────────────────────────────────────────────
# PAGE DEFAULTS
# ─────────────────────────────────────────────
PAGE_DEFAULTS = {
    "duct_form": {
        "flow_rate":    1000.0,    # m³/h
        "velocity":     5.0,       # m/s
        "duct_type":    "round",
        "aspect_ratio": 1.0,
    },
    "pipe_form": {
        "flow_rate": 2.5,          # L/s
        "velocity":  1.5,          # m/s
        "material":  "pvc",
    },
    "vav_form": {
        "design_airflow":  500.0,  # cfm
        "min_airflow":     125.0,  # cfm
        "static_pressure": 1.0,    # in. wg
        "turndown_ratio":  25.0,   # %
    },
    "pump_form": {
        "flow_rate":   2.5,        # L/s
        "pipe_length": 50.0,       # m
        "pipe_size":   25,         # mm
        "material":    "copper",
    },
    "pump_fittings": [
        {"id": "1", "type": "elbow_90",    "count": 4},
        {"id": "2", "type": "check_valve", "count": 1},
    ],
}

RESULT_KEYS = ("duct_result", "pipe_result", "vav_result", "pump_result")

TURNDOWN_MIN  = 10.0
TURNDOWN_MAX  = 50.0
TURNDOWN_STEP = 5.0

CALCULATOR_CARDS = [
    ("duct-sizing", "💨 Duct Sizing",     "Calculate duct dimensions, velocity, and pressure loss"),
    ("pipe-sizing", "🚰 Pipe Sizing",     "Size pipes based on flow rate, velocity, and material"),
    ("vav-sizing",  "🌀 VAV Box Sizing",  "Determine optimal VAV box sizing for your zones"),
    ("pump-head",   "⚙️ Pump Head Loss",  "Calculate pump head requirements and system curves"),
]


# ─────────────────────────────────────────────
# FORM HELPERS
# ─────────────────────────────────────────────
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))")


def coerce_number(text) -> float:
    """
    Read the leading number from user text, the way a browser number field does.
    Trailing text is ignored ("5 m/s" -> 5, "1_000" -> 1); text with no leading
    number becomes 0. Only the literal "Infinity" yields an infinite value.
    """
    match = _LEADING_NUMBER.match(str(text))
    if not match:
        return 0.0
    return float(match.group(1))


def fmt_input(value: float) -> str:
    """Render a number back into a text field."""
    return f"{value:g}"


def update_vav_form(form: dict, name: str, value: float) -> dict:
    """
    Apply one edit to the VAV form, keeping min airflow and turndown in step.

    - turndown_ratio edited  → min airflow recomputed from design airflow
    - min_airflow edited     → turndown recomputed from design airflow
    - design_airflow edited  → turndown kept, min airflow recomputed
    """
    new = dict(form)
    new[name] = value
    if name == "turndown_ratio":
        new["min_airflow"] = mc.min_airflow_from_turndown(form["design_airflow"], value)
    elif name == "min_airflow":
        new["turndown_ratio"] = mc.turndown_from_min_airflow(form["design_airflow"], value)
    elif name == "design_airflow":
        new["min_airflow"] = mc.min_airflow_from_turndown(value, form["turndown_ratio"])
    return new


def slider_turndown(turndown: float) -> float:
    """Snap a turndown ratio onto the slider's 10-50 % / 5 % grid."""
    if not math.isfinite(turndown):
        return TURNDOWN_MIN
    snapped = round(turndown / TURNDOWN_STEP) * TURNDOWN_STEP
    return min(max(snapped, TURNDOWN_MIN), TURNDOWN_MAX)


def add_fitting_row(rows: list, fitting_type: str = "elbow_90") -> list:
    """Append a fitting row with a fresh id and a count of 1."""
    ids = [int(r["id"]) for r in rows if str(r["id"]).isdigit()]
    next_id = str(max(ids) + 1) if ids else "1"
    return rows + [{"id": next_id, "type": fitting_type, "count": 1}]


def remove_fitting_row(rows: list, row_id: str) -> list:
    return [r for r in rows if r["id"] != row_id]


def update_fitting_row(rows: list, row_id: str, field: str, value) -> list:
    return [dict(r, **{field: value}) if r["id"] == row_id else r for r in rows]


def friction_loss_rate(result: dict, pipe_length: float) -> float:
    """Pipe friction loss per metre of run (m/m); a zero length gives inf/nan."""
    loss = result["friction_loss"]
    if pipe_length == 0:
        return math.nan if loss == 0 or math.isnan(loss) else math.copysign(math.inf, loss)
    return loss / pipe_length


def fmt_value(value: float, digits: int = 2, unit: str = "") -> str:
    """Fixed-point display; inf/nan are shown as-is so bad inputs stay visible."""
    text = f"{value:,.{digits}f}"
    return f"{text} {unit}".strip()


# ─────────────────────────────────────────────
# CHART
# ─────────────────────────────────────────────
def generate_system_curve_chart(curve: list, design_flow: float, design_head: float) -> bytes:
    """Generate the pump system curve chart as PNG bytes using matplotlib."""
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(10, 6))
    fig.patch.set_facecolor('#fafafa')

    flows = [p[0] for p in curve]
    heads = [p[1] for p in curve]
    ax.plot(flows, heads, '-', color='#b11f33', linewidth=2, label='System Curve', zorder=3)

    ax.plot(design_flow, design_head, '*', color='#2a3853', markersize=18,
            label=f'Design Point ({design_flow:.2f} L/s, {design_head:.2f} m)',
            zorder=5, markeredgecolor='#101820', markeredgewidth=0.5)

    ax.set_xlabel('Flow Rate (L/s)', fontsize=12, fontweight='bold', color='#2a3853')
    ax.set_ylabel('Total Head (m)', fontsize=12, fontweight='bold', color='#2a3853')
    ax.set_title('Pump System Curve', fontsize=14, fontweight='bold', color='#101820')
    ax.legend(loc='upper left', fontsize=10)
    ax.grid(True, alpha=0.2, color='#97999b')
    ax.set_xlim(left=0)
    ax.set_ylim(bottom=0)
    ax.set_facecolor('#fafafa')

    plt.tight_layout()
    buf = io.BytesIO()
    fig.savefig(buf, format='png', dpi=150, bbox_inches='tight')
    plt.close(fig)
    buf.seek(0)
    return buf.read()


# ─────────────────────────────────────────────
# STATE
# ─────────────────────────────────────────────
def init_state():
    """Initialize session state with the page defaults."""
    for k, v in PAGE_DEFAULTS.items():
        if k not in st.session_state:
            st.session_state[k] = [dict(r) for r in v] if isinstance(v, list) else dict(v)
    for k in RESULT_KEYS:
        if k not in st.session_state:
            st.session_state[k] = None


def navigate(route: str):
    st.query_params["page"] = route
    if route in PAGES:
        st.session_state.nav = route


def _on_nav():
    st.query_params["page"] = st.session_state.nav


def _widget_key(form_key: str, field: str) -> str:
    return f"{form_key}.{field}"


def _on_number_change(form_key: str, field: str):
    value = coerce_number(st.session_state[_widget_key(form_key, field)])
    form = st.session_state[form_key]
    if form_key == "vav_form":
        form = update_vav_form(form, field, value)
        st.session_state[_widget_key("vav_form", "min_airflow")] = f'{form["min_airflow"]:.0f}'
        st.session_state[_widget_key("vav_form", "turndown_ratio")] = slider_turndown(form["turndown_ratio"])
    else:
        form = dict(form, **{field: value})
    st.session_state[form_key] = form


def _on_turndown_change():
    value = st.session_state[_widget_key("vav_form", "turndown_ratio")]
    form = update_vav_form(st.session_state.vav_form, "turndown_ratio", value)
    st.session_state[_widget_key("vav_form", "min_airflow")] = f'{form["min_airflow"]:.0f}'
    st.session_state.vav_form = form


def _on_select_change(form_key: str, field: str):
    value = st.session_state[_widget_key(form_key, field)]
    st.session_state[form_key] = dict(st.session_state[form_key], **{field: value})


def number_field(form_key: str, field: str, label: str, help: str = None, fmt=fmt_input):
    """Free-text numeric input bound to st.session_state[form_key][field]."""
    key = _widget_key(form_key, field)
    if key not in st.session_state:
        st.session_state[key] = fmt(st.session_state[form_key][field])
    st.text_input(label, key=key, help=help, on_change=_on_number_change, args=(form_key, field))


def select_field(form_key: str, field: str, label: str, options, format_func=str):
    key = _widget_key(form_key, field)
    if key not in st.session_state:
        st.session_state[key] = st.session_state[form_key][field]
    st.selectbox(label, options, key=key, format_func=format_func,
                 on_change=_on_select_change, args=(form_key, field))


def export_stub():
    if st.button("📥 Export Results"):
        st.toast("Export Started — your calculation results are being prepared for export.")


def show_input_warnings(**values):
    for msg in mc.input_warnings(**values):
        st.warning(f"⚠️ {msg[0].upper()}{msg[1:]}")


def result_toast(name: str, result: dict) -> str:
    """Toast text after a calculation; non-finite results point back at the inputs."""
    if mc.is_finite_result(result):
        return f"Calculation Complete — {name} calculation has been performed successfully."
    return f"Check Inputs — {name} produced non-finite values. Review zero or negative inputs."


def nav_selection(route: str):
    """Sidebar radio value for a route; None for unknown routes so every entry stays clickable."""
    return route if route in PAGES else None


def record_result(key: str, name: str, result: dict):
    st.session_state[key] = result
    if mc.is_finite_result(result):
        log.info("%s calculated: %s", name, result)
    else:
        log.warning("%s produced non-finite values: %s", name, result)
    st.toast(result_toast(name, result))


def table(rows: dict):
    st.table(pd.DataFrame(rows.items(), columns=["Parameter", "Value"]))


# ─────────────────────────────────────────────
# PAGES
# ─────────────────────────────────────────────
def render_dashboard():
    st.markdown("## 🏗️ Engineering Calculators")
    st.caption("Mechanical and HVAC design tools for quick first-pass sizing")

    cols = st.columns(2)
    for i, (route, title, desc) in enumerate(CALCULATOR_CARDS):
        with cols[i % 2]:
            with st.container(border=True):
                st.markdown(f"#### {title}")
                st.write(desc)
                st.button("Open calculator", key=f"open_{route}", on_click=navigate, args=(route,),
                          use_container_width=True)


def render_duct_sizing():
    st.markdown("## 💨 Duct Sizing Calculator")
    st.caption("Calculate duct dimensions based on airflow and velocity")

    form = st.session_state.duct_form
    col_in, col_ref = st.columns([2, 1])
    with col_in:
        st.markdown("#### Input Parameters")
        c1, c2 = st.columns(2)
        with c1:
            number_field("duct_form", "flow_rate", "Airflow Rate (m³/h)",
                         help="Volume of air flowing through the duct")
        with c2:
            number_field("duct_form", "velocity", "Air Velocity (m/s)",
                         help="Recommended: 3-8 m/s for main ducts, 2-5 m/s for branches")
        select_field("duct_form", "duct_type", "Duct Type", ["round", "rectangular"],
                     format_func=lambda t: t.capitalize())
        if form["duct_type"] == "rectangular":
            number_field("duct_form", "aspect_ratio", "Aspect Ratio (W:H)",
                         help="Ratio of duct width to height. Recommended range: 1:1 to 4:1")

        if st.button("🧮 Calculate", type="primary"):
            form = st.session_state.duct_form
            result = mc.size_duct(form["flow_rate"], form["velocity"], form["duct_type"],
                                  form["aspect_ratio"])
            record_result("duct_result", "Duct sizing", result)

    with col_ref:
        st.markdown("#### 📏 Reference Values")
        st.markdown("**Recommended Velocities**")
        st.markdown("\n".join(f"- {where}: {v}" for where, v in mc.DUCT_VELOCITY_GUIDE))
        st.markdown("**Aspect Ratio Guidelines**")
        st.markdown("\n".join(f"- {line}" for line in mc.ASPECT_RATIO_GUIDE))

    result = st.session_state.duct_result
    if not result:
        return

    st.markdown("---")
    st.markdown("#### 📊 Results")
    form = st.session_state.duct_form
    show_input_warnings(flow_rate=form["flow_rate"], velocity=form["velocity"])
    rows = {"Cross-sectional Area": fmt_value(result["area"], 4, "m²")}
    if "diameter" in result:
        rows["Diameter"] = f'{fmt_value(result["diameter"] * 1000, 0, "mm")}'
    else:
        rows["Width"] = fmt_value(result["width"] * 1000, 0, "mm")
        rows["Height"] = fmt_value(result["height"] * 1000, 0, "mm")
        rows["Equivalent Diameter"] = fmt_value(result["equivalent_diameter"] * 1000, 0, "mm")
    rows["Friction Loss"] = fmt_value(result["friction_loss"], 2, "Pa/m")
    table(rows)
    export_stub()


def render_pipe_sizing():
    st.markdown("## 🚰 Pipe Sizing Calculator")
    st.caption("Calculate optimal pipe dimensions based on flow requirements")

    col_in, col_ref = st.columns([2, 1])
    with col_in:
        st.markdown("#### Input Parameters")
        c1, c2, c3 = st.columns(3)
        with c1:
            number_field("pipe_form", "flow_rate", "Flow Rate (L/s)",
                         help="Volume of water flowing through the pipe")
        with c2:
            number_field("pipe_form", "velocity", "Velocity (m/s)",
                         help="Recommended: 0.75-2.5 m/s for water pipes")
        with c3:
            select_field("pipe_form", "material", "Pipe Material", list(mc.MATERIAL_ROUGHNESS),
                         format_func=lambda m: mc.MATERIAL_NAMES[m])

        if st.button("🧮 Calculate", type="primary"):
            form = st.session_state.pipe_form
            result = mc.size_pipe(form["flow_rate"], form["velocity"], form["material"])
            record_result("pipe_result", "Pipe sizing", result)

    with col_ref:
        st.markdown("#### 📏 Reference Values")
        st.markdown(
            f"**Recommended Velocities**\n"
            f"- Water pipes: {mc.PIPE_VELOCITY_MIN}-{mc.PIPE_VELOCITY_MAX} m/s\n"
            f"- Below {mc.PIPE_VELOCITY_MIN} m/s: air and sediment risk\n"
            f"- Above {mc.PIPE_VELOCITY_MAX} m/s: noise and erosion risk"
        )
        st.markdown("**Roughness (mm)**")
        st.table(pd.DataFrame(
            [(mc.MATERIAL_NAMES[m], e) for m, e in mc.MATERIAL_ROUGHNESS.items()],
            columns=["Material", "ε (mm)"],
        ))

    result = st.session_state.pipe_result
    if not result:
        return

    form = st.session_state.pipe_form
    st.markdown("---")
    st.markdown("#### 📊 Results")
    show_input_warnings(flow_rate=form["flow_rate"], velocity=form["velocity"])
    table({
        "Calculated Diameter":    fmt_value(result["diameter"], 2, "mm"),
        "Recommended Size":       f'{result["recommended_size"]} mm',
        "Pressure Loss":          fmt_value(result["pressure_loss"], 2, "Pa/m"),
        "Reynolds Number":        fmt_value(result["reynolds_number"], 0),
        "Flow Type":              mc.flow_regime(result["reynolds_number"]),
        "Pressure Loss per 100m": fmt_value(result["pressure_loss"] * 100 / 1000, 2, "kPa"),
        "Velocity Check":         mc.pipe_velocity_check(form["velocity"]),
    })
    export_stub()


def render_vav_sizing():
    st.markdown("## 🌀 VAV Box Sizing Calculator")
    st.caption("Select a variable air volume terminal for a zone")

    key = _widget_key("vav_form", "turndown_ratio")
    if key not in st.session_state:
        st.session_state[key] = slider_turndown(st.session_state.vav_form["turndown_ratio"])

    st.markdown("#### Input Parameters")
    c1, c2 = st.columns(2)
    with c1:
        number_field("vav_form", "design_airflow", "Design Airflow (CFM)",
                     help="Maximum airflow required by the zone")
        number_field("vav_form", "static_pressure", "Inlet Static Pressure (in. wg)")
    with c2:
        st.slider("Turndown Ratio (%)", TURNDOWN_MIN, TURNDOWN_MAX, step=TURNDOWN_STEP,
                  key=key, on_change=_on_turndown_change)
        number_field("vav_form", "min_airflow", "Minimum Airflow (CFM)",
                     help="Calculated based on turndown ratio", fmt=lambda v: f"{v:.0f}")
    st.info("Typical VAV turndown ratios range from 20-30% for zones with constant occupancy.")

    b1, b2, _ = st.columns([1, 1, 4])
    with b1:
        if st.button("🧮 Calculate", type="primary"):
            form = st.session_state.vav_form
            result = mc.size_vav_box(form["design_airflow"], form["min_airflow"], form["static_pressure"])
            record_result("vav_result", "VAV box sizing", result)
    with b2:
        if st.button("Reset"):
            st.session_state.vav_result = None

    result = st.session_state.vav_result
    if not result:
        return

    form = st.session_state.vav_form
    st.markdown("---")
    st.markdown("#### 📊 Results")
    show_input_warnings(design_airflow=form["design_airflow"], static_pressure=form["static_pressure"])
    if form["design_airflow"] > mc.VAV_MAX_AIRFLOW:
        st.warning(f'⚠️ Design airflow exceeds the largest box capacity '
                   f'({mc.VAV_MAX_AIRFLOW:,} CFM). Split the zone across multiple boxes.')

    m1, m2, m3 = st.columns(3)
    m1.metric("Recommended VAV Box Size", result["recommended_size"])
    m2.metric("Neck Velocity", fmt_value(result["neck_velocity"], 0, "fpm"))
    m3.metric("Sound Level", result["sound_level"])
    table({
        "Pressure Drop":   fmt_value(result["pressure_drop"], 3, "in. wg"),
        "Design Airflow":  fmt_value(form["design_airflow"], 0, "CFM"),
        "Minimum Airflow": fmt_value(form["min_airflow"], 0, "CFM"),
        "Turndown Ratio":  fmt_value(form["turndown_ratio"], 0, "%"),
    })
    if result["sound_level"] == "High":
        st.error("❌ High neck velocity — consider a larger box for noise-sensitive spaces.")
    export_stub()


def _on_fitting_change(row_id: str, field: str):
    value = st.session_state[f"fitting_{field}_{row_id}"]
    st.session_state.pump_fittings = update_fitting_row(st.session_state.pump_fittings, row_id, field, value)


def _on_fitting_remove(row_id: str):
    st.session_state.pump_fittings = remove_fitting_row(st.session_state.pump_fittings, row_id)


def _on_fitting_add():
    st.session_state.pump_fittings = add_fitting_row(st.session_state.pump_fittings)


def render_fittings_editor():
    st.markdown("**Fittings**")
    for row in st.session_state.pump_fittings:
        rid = row["id"]
        c1, c2, c3 = st.columns([3, 1, 1])
        type_key, count_key = f"fitting_type_{rid}", f"fitting_count_{rid}"
        if type_key not in st.session_state:
            st.session_state[type_key] = row["type"]
        if count_key not in st.session_state:
            st.session_state[count_key] = row["count"]
        c1.selectbox("Type", list(mc.FITTING_K_VALUES), key=type_key, label_visibility="collapsed",
                     format_func=lambda t: mc.FITTING_NAMES[t], on_change=_on_fitting_change, args=(rid, "type"))
        c2.number_input("Count", min_value=0, step=1, key=count_key, label_visibility="collapsed",
                        on_change=_on_fitting_change, args=(rid, "count"))
        c3.button("🗑️", key=f"fitting_remove_{rid}", on_click=_on_fitting_remove, args=(rid,))
    st.button("➕ Add Fitting", on_click=_on_fitting_add)


def render_pump_head():
    st.markdown("## ⚙️ Pump Head Loss Calculator")
    st.caption("Calculate pump head requirements and system curves")

    st.markdown("#### Input Parameters")
    c1, c2 = st.columns(2)
    with c1:
        number_field("pump_form", "flow_rate", "Flow Rate (L/s)")
        number_field("pump_form", "pipe_length", "Pipe Length (m)")
    with c2:
        select_field("pump_form", "pipe_size", "Pipe Size", list(mc.STANDARD_PIPE_SIZES),
                     format_func=lambda s: f"{s} mm")
        select_field("pump_form", "material", "Pipe Material", list(mc.MATERIAL_ROUGHNESS),
                     format_func=lambda m: mc.MATERIAL_NAMES[m])
    render_fittings_editor()

    if st.button("🧮 Calculate", type="primary"):
        form = st.session_state.pump_form
        fittings = mc.build_fitting_tally(st.session_state.pump_fittings)
        result = mc.pump_head(form["flow_rate"], form["pipe_length"], form["pipe_size"],
                              fittings, form["material"])
        record_result("pump_result", "Pump head loss", result)

    result = st.session_state.pump_result
    if not result:
        return

    form = st.session_state.pump_form
    st.markdown("---")
    st.markdown("#### 📊 Results")
    show_input_warnings(flow_rate=form["flow_rate"], pipe_length=form["pipe_length"])

    col1, col2 = st.columns(2)
    with col1:
        table({
            "Pipe Friction Loss": fmt_value(result["friction_loss"], 2, "m"),
            "Fittings Loss":      fmt_value(result["fittings_loss"], 2, "m"),
            "Total Head":         fmt_value(result["total_head"], 2, "m"),
            "Pump Power":         fmt_value(result["pump_power"], 2, "kW"),
        })
        fit_rows = [{"Fitting": mc.FITTING_NAMES.get(r["type"], r["type"]), "Quantity": r["count"]}
                    for r in st.session_state.pump_fittings]
        if fit_rows:
            st.markdown("**Fittings Summary**")
            st.table(pd.DataFrame(fit_rows))
    with col2:
        m1, m2 = st.columns(2)
        m1.metric("Total Head", fmt_value(result["total_head"], 1, "m"))
        m2.metric("Pump Power", fmt_value(result["pump_power"], 2, "kW"))
        st.markdown("**System Summary**")
        table({
            "Pipe Size":          f'{form["pipe_size"]} mm',
            "Material":           mc.MATERIAL_NAMES.get(form["material"], form["material"]),
            "Pipe Length":        f'{form["pipe_length"]:g} m',
            "Friction Loss Rate": fmt_value(friction_loss_rate(result, form["pipe_length"]), 3, "m/m"),
        })

    st.markdown("#### 📈 System Curve")
    try:
        fittings = mc.build_fitting_tally(st.session_state.pump_fittings)
        curve = mc.pump_system_curve(form["flow_rate"], form["pipe_length"], form["pipe_size"],
                                     fittings, form["material"])
        chart_png = generate_system_curve_chart(curve, form["flow_rate"], result["total_head"])
        st.image(chart_png, use_container_width=True)
    except Exception as e:
        log.exception("System curve rendering failed")
        st.error(f"Chart generation error: {e}")
    export_stub()


def render_not_found(route: str):
    st.markdown("## 404")
    st.error(f"Oops! Page not found: `{route}`")
    st.button("Return to Dashboard", on_click=navigate, args=("dashboard",))


PAGES = {
    "dashboard":   ("🏠 Dashboard",      render_dashboard),
    "duct-sizing": ("💨 Duct Sizing",    render_duct_sizing),
    "pipe-sizing": ("🚰 Pipe Sizing",    render_pipe_sizing),
    "vav-sizing":  ("🌀 VAV Box Sizing", render_vav_sizing),
    "pump-head":   ("⚙️ Pump Head Loss", render_pump_head),
}


# ─────────────────────────────────────────────
# MAIN APP
# ─────────────────────────────────────────────
def main():
    st.set_page_config(
        page_title="Engineering Calculators",
        page_icon="🏗️",
        layout="wide",
    )

    st.markdown("""
    <style>
    .calc-header {
        background: linear-gradient(135deg, #2a3853 0%, #101820 100%);
        padding: 16px 24px;
        border-radius: 8px;
        margin-bottom: 20px;
        border-bottom: 4px solid #b11f33;
    }
    .calc-header h1 {
        color: white;
        margin: 0;
        font-size: 22px;
        font-weight: 900;
    }
    .calc-header p {
        color: #c8c9c7;
        margin: 4px 0 0 0;
        font-size: 13px;
    }
    table {
        font-size: 13px !important;
    }
    </style>
    <div class="calc-header">
        <h1>Engineering Calculators</h1>
        <p>Duct · Pipe · VAV · Pump Head</p>
    </div>
    """, unsafe_allow_html=True)

    init_state()

    route = st.query_params.get("page", "dashboard")
    st.session_state.nav = nav_selection(route)

    with st.sidebar:
        st.markdown("### 🧰 Calculators")
        st.radio("Navigate", list(PAGES), key="nav", format_func=lambda k: PAGES[k][0],
                 label_visibility="collapsed", on_change=_on_nav)
        st.markdown("---")
        if st.button("💾 Save Project", use_container_width=True):
            st.toast("Project Saved — your project has been saved.")
        st.markdown("---")
        st.caption("v1.0 — First-pass sizing. Final design must be verified by a licensed engineer.")

    if route in PAGES:
        PAGES[route][1]()
    else:
        log.warning("Unknown route requested: %s", route)
        render_not_found(route)


if __name__ == "__main__":
    main()
