from collections import Counter
from dataclasses import dataclass, field
from typing import Dict


@dataclass(frozen=True)
class FleetStats:
    total_devices: int
    deployed_devices: int
    undeployed_devices: int
    total_coverage: float  # km, summed coverage range of deployed devices
    total_cost: float
    average_price: float
    average_coverage: float
    devices_by_type: Dict[str, int] = field(default_factory=dict)

    @property
    def deployment_rate(self):
        if self.total_devices == 0:
            return 0.0
        return self.deployed_devices / self.total_devices * 100


def summarize(devices):
    devices = list(devices)
    deployed = [d for d in devices if d.deployed]
    total_cost = sum(d.price for d in devices)
    total_coverage = sum(d.coverage_range for d in deployed)
    return FleetStats(
        total_devices=len(devices),
        deployed_devices=len(deployed),
        undeployed_devices=len(devices) - len(deployed),
        total_coverage=total_coverage,
        total_cost=total_cost,
        average_price=total_cost / len(devices) if devices else 0.0,
        average_coverage=total_coverage / len(deployed) if deployed else 0.0,
        devices_by_type=dict(Counter(d.type for d in devices)),
    )
