"""
Mechanical Engineering Calculators — Core Calculations
=======================================================
Closed-form sizing functions behind the calculator pages:
duct sizing, pipe sizing, VAV box sizing and pump head loss.

Engineering Basis:
  - Darcy-Weisbach friction loss: Δp = f*(L/D)*ρ*V²/2
  - Colebrook-White friction factor, explicit (Swamee-Jain) form:
        f = 0.25 / [log10(ε/(3.7D) + 5.74/Re^0.9)]²
  - Huebscher equivalent diameter for rectangular ducts:
        De = 1.30*(a*b)^0.625 / (a+b)^0.25
  - Fitting losses as K-multiples of velocity head: h = K*V²/2g
  - Pump power: P = ρ*g*Q*H / (η*1000)

Every function here is pure. Inputs are never validated: zero or negative
values propagate as inf/nan through the arithmetic instead of raising,
so callers can detect and flag them (see input_warnings()).
"""

import math
from types import MappingProxyType

import numpy as np

from calc_logging import get_logger

log = get_logger("calcs")

# ─────────────────────────────────────────────
# CONSTANTS
# ─────────────────────────────────────────────
AIR_DENSITY      = 1.2           # kg/m³
WATER_DENSITY    = 1000.0        # kg/m³
WATER_KIN_VISC   = 0.000001      # m²/s — water at 20 °C
GRAVITY          = 9.81          # m/s²
PUMP_EFFICIENCY  = 0.7
DUCT_FRICTION_COEFF = 0.025      # simplified duct friction coefficient

DEFAULT_ROUGHNESS = 0.0015       # mm — copper/PVC

# Absolute roughness (mm)
MATERIAL_ROUGHNESS = MappingProxyType({
    "copper":           0.0015,
    "pvc":              0.0015,
    "steel":            0.045,
    "cast_iron":        0.26,
    "concrete":         1.0,
    "galvanized_steel": 0.15,
})

MATERIAL_NAMES = MappingProxyType({
    "copper":           "Copper",
    "pvc":              "PVC",
    "steel":            "Steel",
    "cast_iron":        "Cast Iron",
    "concrete":         "Concrete",
    "galvanized_steel": "Galvanized Steel",
})

# Fitting loss coefficients
FITTING_K_VALUES = MappingProxyType({
    "elbow_90":    0.75,
    "elbow_45":    0.4,
    "tee":         1.0,
    "gate_valve":  0.2,
    "globe_valve": 10.0,
    "check_valve": 2.5,
    "entrance":    0.5,
    "exit":        1.0,
})

FITTING_NAMES = MappingProxyType({
    "elbow_90":    "90° Elbow",
    "elbow_45":    "45° Elbow",
    "tee":         "Tee (Branch Flow)",
    "gate_valve":  "Gate Valve",
    "globe_valve": "Globe Valve",
    "check_valve": "Check Valve",
    "entrance":    "Entrance",
    "exit":        "Exit",
})

STANDARD_PIPE_SIZES = (15, 20, 25, 32, 40, 50, 65, 80, 100, 125, 150, 200, 250, 300)  # mm
VAV_BOX_SIZES       = (6, 8, 10, 12, 14, 16, 18, 24)                                   # in.
VAV_CFM_PER_SQ_IN   = 25          # max cfm per (nominal inlet in.)²
VAV_MAX_AIRFLOW     = VAV_BOX_SIZES[-1] ** 2 * VAV_CFM_PER_SQ_IN                         # cfm

# Flow regime thresholds (Reynolds number)
RE_LAMINAR_MAX      = 2300
RE_TRANSITIONAL_MAX = 4000

# Neck velocity thresholds for sound level (fpm)
VAV_SOUND_HIGH_FPM   = 1800
VAV_SOUND_MEDIUM_FPM = 1200

# Recommended water velocity in pipes (m/s)
PIPE_VELOCITY_MIN = 0.75
PIPE_VELOCITY_MAX = 2.5

DUCT_VELOCITY_GUIDE = (
    ("Main ducts",        "5-8 m/s"),
    ("Branch ducts",      "3-5 m/s"),
    ("Terminal devices",  "2-3 m/s"),
    ("Low noise areas",   "2-4 m/s"),
)

ASPECT_RATIO_GUIDE = (
    "Ideal ratio: 1:1 to 2:1",
    "Maximum recommended: 4:1",
    "Higher ratios increase pressure loss",
)


# ─────────────────────────────────────────────
# LOOKUP HELPERS
# ─────────────────────────────────────────────
def material_roughness(material: str) -> float:
    """Absolute roughness (mm) for a pipe material; unknown materials use copper/PVC."""
    return MATERIAL_ROUGHNESS.get(material) or DEFAULT_ROUGHNESS


def fitting_k_value(fitting: str) -> float:
    """Loss coefficient K for a fitting type, 0 for anything not in the table."""
    return FITTING_K_VALUES.get(fitting) or 0.0


def find_standard_pipe_size(diameter_mm: float) -> int:
    """
    Nearest standard nominal pipe size (mm).
    Scans ascending and keeps the first strict minimum, so a diameter exactly
    halfway between two sizes resolves to the smaller one.
    """
    closest = STANDARD_PIPE_SIZES[0]
    min_diff = abs(diameter_mm - closest)
    for size in STANDARD_PIPE_SIZES:
        diff = abs(diameter_mm - size)
        if diff < min_diff:
            min_diff = diff
            closest = size
    return closest


def build_fitting_tally(rows) -> dict:
    """
    Collapse an ordered list of {"id", "type", "count"} rows into
    {fitting_type: total_count}. Duplicate types are summed.
    """
    tally = {}
    for row in rows:
        tally[row["type"]] = tally.get(row["type"], 0) + row["count"]
    return tally


def _colebrook_explicit(roughness_m, diameter_m, reynolds):
    """Explicit Colebrook-White approximation for the Darcy friction factor."""
    return 0.25 / np.log10(roughness_m / (3.7 * diameter_m) + 5.74 / np.power(reynolds, 0.9)) ** 2


# ─────────────────────────────────────────────
# DUCT SIZING
# ─────────────────────────────────────────────
def size_duct(flow_rate: float, velocity: float, duct_type: str = "round",
              aspect_ratio: float = 1) -> dict:
    """
    Size a supply duct from airflow (m³/h) and design velocity (m/s).

    Round ducts return a diameter; anything else is sized as rectangular with
    width/height = aspect_ratio and reports its equivalent round diameter.
    friction_loss (Pa/m) is a simplified proxy, not a full Colebrook solve.
    """
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        flow_m3s = np.float64(flow_rate) / 3600
        area = flow_m3s / np.float64(velocity)
        friction_loss = (DUCT_FRICTION_COEFF * velocity * velocity * AIR_DENSITY) / (2 * np.sqrt(area / np.pi) * 2)

        if duct_type == "round":
            diameter = 2 * np.sqrt(area / np.pi)
            result = {
                "area":          float(area),
                "diameter":      float(diameter),
                "friction_loss": float(friction_loss),
            }
        else:
            width = np.sqrt(area * aspect_ratio)
            height = width / np.float64(aspect_ratio)
            equivalent_diameter = 1.3 * np.power(width * height, 0.625) / np.power(width + height, 0.25)
            result = {
                "area":                float(area),
                "width":               float(width),
                "height":              float(height),
                "equivalent_diameter": float(equivalent_diameter),
                "friction_loss":       float(friction_loss),
            }

    log.debug("size_duct(%s, %s, %s, %s) -> %s", flow_rate, velocity, duct_type, aspect_ratio, result)
    return result


# ─────────────────────────────────────────────
# PIPE SIZING
# ─────────────────────────────────────────────
def size_pipe(flow_rate: float, velocity: float, material: str) -> dict:
    """
    Size a water pipe from flow (L/s) and design velocity (m/s).
    Returns diameter (mm), pressure_loss (Pa/m), reynolds_number and the
    nearest standard size (mm).
    """
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        flow_m3s = np.float64(flow_rate) / 1000
        area = flow_m3s / np.float64(velocity)
        diameter = 2 * np.sqrt(area / np.pi)

        roughness_mm = material_roughness(material)
        reynolds = (velocity * diameter) / WATER_KIN_VISC

        f = _colebrook_explicit(roughness_mm / 1000, diameter, reynolds)
        pressure_loss = f * (WATER_DENSITY * velocity * velocity) / (2 * diameter)

        diameter_mm = float(diameter * 1000)

    result = {
        "diameter":         diameter_mm,
        "pressure_loss":    float(pressure_loss),
        "reynolds_number":  float(reynolds),
        "recommended_size": find_standard_pipe_size(diameter_mm),
    }
    log.debug("size_pipe(%s, %s, %s) -> %s", flow_rate, velocity, material, result)
    return result


def flow_regime(reynolds: float) -> str:
    """Laminar / Transitional / Turbulent classification from Reynolds number."""
    if reynolds < RE_LAMINAR_MAX:
        return "Laminar"
    if reynolds < RE_TRANSITIONAL_MAX:
        return "Transitional"
    return "Turbulent"


def pipe_velocity_check(velocity: float) -> str:
    """Compare a water velocity (m/s) against the recommended 0.75-2.5 m/s band."""
    if velocity < PIPE_VELOCITY_MIN:
        return "Below Recommended (Risk of Air/Sediment)"
    if velocity > PIPE_VELOCITY_MAX:
        return "Above Recommended (Risk of Noise/Erosion)"
    return "Within Recommended Range"


# ─────────────────────────────────────────────
# VAV BOX SIZING
# ─────────────────────────────────────────────
def size_vav_box(design_airflow: float, min_airflow: float, static_pressure: float) -> dict:
    """
    Select a VAV box inlet size for a design airflow (cfm).

    The first size whose capacity (size² × 25 cfm) covers the design airflow
    wins. Above the largest box (14,400 cfm) no size matches and the 6"
    default is kept; callers should check VAV_MAX_AIRFLOW themselves.
    min_airflow only feeds the caller's turndown bookkeeping.
    """
    box_size = VAV_BOX_SIZES[0]
    for size in VAV_BOX_SIZES:
        max_airflow = size * size * VAV_CFM_PER_SQ_IN
        if design_airflow <= max_airflow:
            box_size = size
            break

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        neck_area = math.pi * (box_size / 24) ** 2  # ft²
        neck_velocity = np.float64(design_airflow) / neck_area
        pressure_drop = 0.07 * (neck_velocity / 1000) ** 2 * static_pressure

    if neck_velocity > VAV_SOUND_HIGH_FPM:
        sound_level = "High"
    elif neck_velocity > VAV_SOUND_MEDIUM_FPM:
        sound_level = "Medium"
    else:
        sound_level = "Low"

    result = {
        "recommended_size": f'{box_size}"',
        "pressure_drop":    float(pressure_drop),
        "neck_velocity":    float(neck_velocity),
        "sound_level":      sound_level,
    }
    log.debug("size_vav_box(%s, %s, %s) -> %s", design_airflow, min_airflow, static_pressure, result)
    return result


def min_airflow_from_turndown(design_airflow: float, turndown_pct: float) -> float:
    """Minimum airflow (cfm) for a turndown ratio given as % of design airflow."""
    return design_airflow * (turndown_pct / 100)


def turndown_from_min_airflow(design_airflow: float, min_airflow: float) -> float:
    """Turndown ratio (%) of a minimum airflow. Zero design airflow gives inf/nan."""
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return float(np.float64(min_airflow) / design_airflow * 100)


# ─────────────────────────────────────────────
# PUMP HEAD LOSS
# ─────────────────────────────────────────────
def pump_head(flow_rate: float, pipe_length: float, pipe_size: float,
              fittings: dict, material: str) -> dict:
    """
    Pump head for a single pipe run.

    flow_rate in L/s, pipe_length in m, pipe_size (nominal bore) in mm,
    fittings as {fitting_type: count}. Returns friction_loss, fittings_loss
    and total_head in metres of water and pump_power in kW at 70 % efficiency.
    """
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        diameter = np.float64(pipe_size) / 1000
        velocity = (flow_rate / 1000) / (np.pi * (diameter / 2) ** 2)

        roughness = material_roughness(material) / 1000  # m
        reynolds = (velocity * diameter) / WATER_KIN_VISC

        f = _colebrook_explicit(roughness, diameter, reynolds)
        friction_loss = f * (pipe_length / diameter) * (velocity * velocity) / (2 * GRAVITY)

        # sorted so the sum does not depend on the tally's insertion order
        fittings_loss = np.float64(0.0)
        for fitting in sorted(fittings):
            k = fitting_k_value(fitting)
            fittings_loss += fittings[fitting] * k * (velocity * velocity) / (2 * GRAVITY)

        total_head = friction_loss + fittings_loss
        pump_power = (WATER_DENSITY * GRAVITY * (flow_rate / 1000) * total_head) / (PUMP_EFFICIENCY * 1000)

    result = {
        "friction_loss": float(friction_loss),
        "fittings_loss": float(fittings_loss),
        "total_head":    float(total_head),
        "pump_power":    float(pump_power),
    }
    log.debug("pump_head(%s, %s, %s, %s, %s) -> %s",
              flow_rate, pipe_length, pipe_size, fittings, material, result)
    return result


def pump_system_curve(flow_rate: float, pipe_length: float, pipe_size: float,
                      fittings: dict, material: str, n_points: int = 20) -> list:
    """
    System curve: total head vs flow from 0 to 120% of design flow.
    Returns list of (flow L/s, head m) tuples.
    """
    points = []
    for i in range(n_points + 1):
        frac = i / n_points * 1.2
        flow = flow_rate * frac
        head = pump_head(flow, pipe_length, pipe_size, fittings, material)["total_head"] if frac > 0 else 0.0
        points.append((flow, head))
    return points


# ─────────────────────────────────────────────
# ADVISORY VALIDATION
# ─────────────────────────────────────────────
def input_warnings(**values) -> list:
    """
    Non-blocking checks on calculator inputs.
    Returns a message for every value that is not a positive finite number.
    """
    messages = []
    for name, value in values.items():
        label = name.replace("_", " ")
        if not math.isfinite(value):
            messages.append(f"{label} is not a finite number")
        elif value <= 0:
            messages.append(f"{label} must be greater than zero (got {value:g})")
    return messages


def is_finite_result(result: dict) -> bool:
    """True when every numeric field of a result record is finite."""
    return all(math.isfinite(v) for v in result.values() if isinstance(v, (int, float)))
