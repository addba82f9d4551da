"""Default reference tables for the mission scorer.

These literals seed ``ReferenceTablesConfig``. Override any of them through
the YAML configuration file rather than editing this module.
"""

BUSINESS_CATEGORIES = {
    "SatCom": {
        "name": "Satellite Communications",
        "description": "Providing internet, voice, and data services via satellite networks",
        "avg_launch_cost": 62_000_000,
        "avg_payload_mass": 4500,
        "debris_risk_multiplier": 1.2,
        "regulatory_complexity": 8,
        "market_size": 145_000_000_000,
    },
    "EarthObservation": {
        "name": "Earth Observation",
        "description": "Monitoring Earth's surface, atmosphere, and climate for scientific and commercial use",
        "avg_launch_cost": 45_000_000,
        "avg_payload_mass": 3200,
        "debris_risk_multiplier": 0.9,
        "regulatory_complexity": 6,
        "market_size": 8_200_000_000,
    },
    "InSpaceManufacturing": {
        "name": "In-Space Manufacturing",
        "description": "Manufacturing products in the unique environment of space (microgravity, vacuum)",
        "avg_launch_cost": 95_000_000,
        "avg_payload_mass": 8000,
        "debris_risk_multiplier": 1.5,
        "regulatory_complexity": 9,
        "market_size": 2_500_000_000,
    },
    "LEOInfrastructure": {
        "name": "LEO Infrastructure & Servicing",
        "description": "Building and maintaining infrastructure in Low Earth Orbit, including satellite servicing",
        "avg_launch_cost": 78_000_000,
        "avg_payload_mass": 6200,
        "debris_risk_multiplier": 1.1,
        "regulatory_complexity": 7,
        "market_size": 4_800_000_000,
    },
}

# Base cost per stage in USD, before mission-specific adjustment.
VENDOR_COSTS = [
    {
        "vendor": "SpaceX",
        "stages": {
            "Manufacturing": 18_000_000,
            "Launch": 55_000_000,
            "Ground Segment": 4_000_000,
            "Operations": 6_000_000,
        },
    },
    {
        "vendor": "ULA",
        "stages": {
            "Manufacturing": 28_000_000,
            "Launch": 110_000_000,
            "Ground Segment": 7_000_000,
            "Operations": 9_000_000,
        },
    },
    {
        "vendor": "RocketLab",
        "stages": {
            "Manufacturing": 12_000_000,
            "Launch": 7_500_000,
            "Ground Segment": 3_000_000,
            "Operations": 4_500_000,
        },
    },
    {
        "vendor": "Arianespace",
        "stages": {
            "Manufacturing": 25_000_000,
            "Launch": 90_000_000,
            "Ground Segment": 6_000_000,
            "Operations": 8_000_000,
        },
    },
    {
        "vendor": "ISRO",
        "stages": {
            "Manufacturing": 10_000_000,
            "Launch": 32_000_000,
            "Ground Segment": 2_500_000,
            "Operations": 4_000_000,
        },
    },
    {
        "vendor": "NASA",
        "stages": {
            "Manufacturing": 30_000_000,
            "Launch": 130_000_000,
            "Ground Segment": 8_000_000,
            "Operations": 12_000_000,
        },
    },
]

# Launch vehicle class reliability (0-100) used by the technical score.
LAUNCH_VEHICLES = {
    "Small": {"reliability": 88.0, "description": "Small launcher (<=500kg)"},
    "Medium": {"reliability": 95.0, "description": "Medium launcher (500kg-10t)"},
    "Heavy": {"reliability": 92.0, "description": "Heavy launcher (10t+)"},
    "Rideshare": {"reliability": 90.0, "description": "Rideshare opportunity"},
    "Unknown": {"reliability": 85.0, "description": "Unspecified launch vehicle"},
}

# Altitude bands, ordered by exclusive upper bound in km. The last band is open.
ALTITUDE_BANDS = [
    {"label": "200-400", "upper_km": 400, "operational_complexity": 1.0},
    {"label": "400-600", "upper_km": 600, "operational_complexity": 1.1},
    {"label": "600-1000", "upper_km": 1000, "operational_complexity": 1.25},
    {"label": "1000+", "upper_km": None, "operational_complexity": 1.5},
]

AGENCIES = [
    {
        "agency": "NASA",
        "launch_cost_per_kg": 20_000,  # Mixed providers/programs
        "annual_launches": 4,
        "reliability_pct": 97,
        "typical_lead_time_months": 24,
        "notable_vehicles": ["SLS", "Commercial Crew (providers)", "Commercial Cargo"],
    },
    {
        "agency": "SpaceX",
        "launch_cost_per_kg": 2_700,  # Falcon 9 rideshare ballpark
        "annual_launches": 100,
        "reliability_pct": 99,
        "typical_lead_time_months": 6,
        "notable_vehicles": ["Falcon 9", "Falcon Heavy", "Starship (dev)"],
    },
    {
        "agency": "ISRO",
        "launch_cost_per_kg": 5_000,  # PSLV/SSLV estimates
        "annual_launches": 6,
        "reliability_pct": 96,
        "typical_lead_time_months": 12,
        "notable_vehicles": ["PSLV", "GSLV", "SSLV"],
    },
]
