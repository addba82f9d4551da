"""Parameter Normalizer.

Normalizes raw mission parameter records into ``MissionParameters``.
Handles both wizard schemas (current and legacy field names), the
alternate launch vehicle vocabulary and form option labels that differ
from the scoring vocabulary.
"""

import math
from typing import Any, Optional

from .schema import LaunchVehicleType, MissionParameters


class ParameterNormalizer:
    """Normalizes raw parameter dicts into MissionParameters."""

    # Legacy form keys -> canonical field names
    LEGACY_FIELDS = {
        "targetOrbitalAltitude": "target_altitude",
        "targetAnnualRevenue": "target_revenue",
        "requiredMissionLifespan": "mission_lifespan",
        "dataLicensingModel": "data_licensing",
    }

    # Canonical field name -> accepted keys (snake_case first)
    FIELD_KEYS = {
        name: (name, field.alias)
        for name, field in MissionParameters.model_fields.items()
    }

    FLOAT_FIELDS = (
        "target_revenue",
        "product_value_density",
        "target_altitude",
        "mission_lifespan",
        "payload_mass",
        "lead_time_tolerance",
    )
    INT_FIELDS = ("constellation_size",)
    STRING_FIELDS = (
        "business_category",
        "target_market",
        "launch_vehicle_type",
        "selected_launch_site",
        "deorbit_method",
        "ssa_strategy",
        "data_licensing",
    )

    # Wizard option labels -> scoring vocabulary
    DEORBIT_SYNONYMS = {
        "propulsive": "Active Propulsion",
        "active propulsion": "Active Propulsion",
        "drag enhancement": "Drag Enhancement",
    }
    SSA_SYNONYMS = {
        "commercial service": "Commercial",
        "commercial": "Commercial",
        "in-house": "In-house",
        "inhouse": "In-house",
    }
    LICENSING_SYNONYMS = {
        "open": "Open",
        "restricted": "Restricted",
    }

    TRUE_STRINGS = {"true", "yes", "1", "y", "on"}

    def __init__(self):
        self.warnings: list[str] = []

    def normalize(self, raw: dict[str, Any]) -> MissionParameters:
        """Normalize a raw parameter dict into MissionParameters."""
        self.warnings = []
        values: dict[str, Any] = {}

        for name, keys in self.FIELD_KEYS.items():
            value = self._lookup(raw, keys)
            if value is not None:
                values[name] = value

        # Legacy keys only fill gaps
        for legacy_key, name in self.LEGACY_FIELDS.items():
            if name not in values and raw.get(legacy_key) is not None:
                values[name] = raw[legacy_key]

        for name in self.FLOAT_FIELDS:
            if name in values:
                values[name] = self._to_float(name, values[name])
        for name in self.INT_FIELDS:
            if name in values:
                number = self._to_float(name, values[name])
                values[name] = int(round(number)) if number is not None else None
        for name in self.STRING_FIELDS:
            if name in values:
                values[name] = str(values[name]).strip() or None

        if "in_space_propulsion" in values:
            values["in_space_propulsion"] = self._to_bool(values["in_space_propulsion"])

        values["launch_vehicle_type"] = self._normalize_vehicle(values.get("launch_vehicle_type"))
        values["deorbit_method"] = self._map(values.get("deorbit_method"), self.DEORBIT_SYNONYMS)
        values["ssa_strategy"] = self._map(values.get("ssa_strategy"), self.SSA_SYNONYMS)
        values["data_licensing"] = self._map(values.get("data_licensing"), self.LICENSING_SYNONYMS)

        return MissionParameters.model_validate(values)

    @staticmethod
    def _lookup(raw: dict[str, Any], keys: tuple[Optional[str], ...]) -> Any:
        for key in keys:
            if key and raw.get(key) is not None:
                return raw[key]
        return None

    def _to_float(self, name: str, value: Any) -> Optional[float]:
        if isinstance(value, bool):
            self.warnings.append(f"{name}: boolean is not a number; ignored")
            return None
        try:
            if isinstance(value, (int, float)):
                number = float(value)
            else:
                number = float(str(value).replace(",", "").replace("$", "").strip())
        except (ValueError, OverflowError):
            self.warnings.append(f"{name}: could not parse '{value}' as a number; ignored")
            return None
        if not math.isfinite(number):
            self.warnings.append(f"{name}: '{value}' is not a finite number; ignored")
            return None
        return number

    def _to_bool(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return value != 0
        return str(value).strip().lower() in self.TRUE_STRINGS

    def _normalize_vehicle(self, value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        vehicle = LaunchVehicleType.from_string(value)
        if vehicle == LaunchVehicleType.UNKNOWN:
            self.warnings.append(f"launch_vehicle_type: unknown value '{value}'")
            return value
        return vehicle.value

    @staticmethod
    def _map(value: Optional[str], synonyms: dict[str, str]) -> Optional[str]:
        if not value:
            return None
        return synonyms.get(value.lower(), value)
