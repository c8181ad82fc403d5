"""
Coverage presets for the planner's device picker
"""

DEVICE_PRESETS = {
    "Surveillance Base Station": {
        "coverage_radius": 1.0,  # km
        "unit_cost": 150000,
    },
    "Radar": {
        "coverage_radius": 3.0,
        "unit_cost": 700000,
    },
    "Electro-Optical Sensor": {
        "coverage_radius": 3.0,
        "unit_cost": 400000,
    },
    "Spectrum Detector": {
        "coverage_radius": 3.0,
        "unit_cost": 250000,
    },
    "Directional Jammer": {
        "coverage_radius": 3.0,
        "unit_cost": 180000,
    },
}

DEVICE_TYPES = [
    "Communication base station",
    "Environmental monitoring",
    "Charging facility",
    "Radar",
    "Electro-optical",
    "Spectrum detection",
]
