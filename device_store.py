"""
In-memory device inventory.

``DeviceRepository`` is immutable: every create/update/delete/deploy/undeploy
returns a new repository and leaves the receiver unchanged, so a snapshot
held by one page never changes under it.
"""
import logging
import uuid
from dataclasses import dataclass, replace
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "type", "price", "coverage_range")


class DeviceNotFoundError(KeyError):
    pass


@dataclass(frozen=True)
class Device:
    id: str
    name: str
    type: str
    price: float
    coverage_range: float  # km
    deployed: bool = False
    position: Optional[Tuple[float, float]] = None  # (lng, lat)


def validate_device(name, type, price, coverage_range):
    errors = []
    if not name or not str(name).strip():
        errors.append("Device name is required.")
    if not type or not str(type).strip():
        errors.append("Device type is required.")
    if price is None or not price >= 0:
        errors.append("Price cannot be negative.")
    if coverage_range is None or not coverage_range >= 0:
        errors.append("Coverage range cannot be negative.")
    return errors


def _check_position(lng, lat):
    if not -180 <= lng <= 180:
        raise ValueError(f"Longitude out of range: {lng}")
    if not -90 <= lat <= 90:
        raise ValueError(f"Latitude out of range: {lat}")


class DeviceRepository:
    def __init__(self, devices=()):
        self._devices = tuple(devices)

    def __len__(self):
        return len(self._devices)

    def __iter__(self):
        return iter(self._devices)

    @property
    def devices(self):
        return self._devices

    def deployed(self):
        return tuple(d for d in self._devices if d.deployed)

    def undeployed(self):
        return tuple(d for d in self._devices if not d.deployed)

    def get(self, device_id):
        for device in self._devices:
            if device.id == device_id:
                return device
        raise DeviceNotFoundError(device_id)

    def _replace_one(self, device_id, **changes):
        current = self.get(device_id)
        updated = replace(current, **changes)
        return DeviceRepository(updated if d.id == device_id else d for d in self._devices), updated

    def add(self, name, type, price, coverage_range):
        errors = validate_device(name, type, price, coverage_range)
        if errors:
            raise ValueError("; ".join(errors))
        device = Device(
            id=uuid.uuid4().hex,
            name=name.strip(),
            type=type.strip(),
            price=float(price),
            coverage_range=float(coverage_range),
        )
        logger.info(f"Added device {device.id} ({device.name})")
        return DeviceRepository(self._devices + (device,)), device

    def update(self, device_id, **fields):
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")
        current = self.get(device_id)
        merged = {f: fields.get(f, getattr(current, f)) for f in EDITABLE_FIELDS}
        errors = validate_device(**merged)
        if errors:
            raise ValueError("; ".join(errors))
        changes = {}
        for f, value in fields.items():
            changes[f] = value.strip() if f in ("name", "type") else float(value)
        repo, _ = self._replace_one(device_id, **changes)
        logger.info(f"Updated device {device_id}: {sorted(fields)}")
        return repo

    def delete(self, device_id):
        self.get(device_id)
        logger.info(f"Deleted device {device_id}")
        return DeviceRepository(d for d in self._devices if d.id != device_id)

    def deploy(self, device_id, lng, lat):
        _check_position(lng, lat)
        repo, _ = self._replace_one(device_id, deployed=True, position=(lng, lat))
        logger.info(f"Deployed device {device_id} at ({lng:.6f}, {lat:.6f})")
        return repo

    def undeploy(self, device_id):
        repo, _ = self._replace_one(device_id, deployed=False, position=None)
        logger.info(f"Undeployed device {device_id}")
        return repo


def with_defaults():
    return DeviceRepository([
        Device(id="1", name="Base Station A", type="Communication base station",
               price=50000, coverage_range=10),
        Device(id="2", name="Sensor Node B", type="Environmental monitoring",
               price=20000, coverage_range=5, deployed=True,
               position=(116.397428, 39.90923)),
        Device(id="3", name="Drone Charging Station C", type="Charging facility",
               price=80000, coverage_range=15, deployed=True,
               position=(116.407526, 39.90403)),
    ])
