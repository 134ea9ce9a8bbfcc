"""Sensor label normalization and grouping.

Raw sensor labels are vendor specific ("coretemp Core 3", "nvme Sensor 2",
"acpitz", "iwlwifi_1"). Classification turns them into stable canonical
device names so the renderer can show one row per physical device.

Labels go through two ordered rule chains. The vendor chain runs first and
exposes the processor roles ("core Package", "core <n>"). The device chain
then cleans up everything else. Rules in each chain assume the earlier ones
already ran.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, Sequence

from .models import Reading, ReadingKind

CPU_BUCKET = "CPU"
CORE_BUCKET = "Core"
UNKNOWN_DEVICE = "Unknown"
COMPOSITE_MARKER = "Composite"

Rule = tuple[Callable[[str], bool], Callable[[str], str]]

_CORE_RE = re.compile(r"core \d+")
_NVME_SENSOR_RE = re.compile(r"^nvme Sensor [\d\s]*")


def _strip_prefix(prefix: str) -> Callable[[str], str]:
    return lambda name: name[len(prefix) :]


def _replace(old: str, new: str) -> Callable[[str], str]:
    return lambda name: name.replace(old, new)


def _strip_nvme_sensor(name: str) -> str:
    # "nvme Sensor 2" carries no device name of its own.
    return _NVME_SENSOR_RE.sub("", name, count=1) or "nvme"


VENDOR_RULES: tuple[Rule, ...] = (
    (lambda name: name.startswith("coretemp "), _strip_prefix("coretemp ")),
    (lambda name: "Core " in name, _replace("Core ", "core ")),
    (lambda name: name.startswith("Package id"), lambda name: f"core {name}"),
    (lambda name: name.startswith(("k10temp Tctl", "k10temp Tdie")), lambda _name: "core Package"),
)

DEVICE_RULES: tuple[Rule, ...] = (
    (lambda name: name.startswith("nvme Sensor "), _strip_nvme_sensor),
    (lambda name: name.startswith("nvme Composite "), _strip_prefix("nvme Composite ")),
    (lambda name: "SSD " in name, _replace("SSD ", "")),
    (lambda name: " temp1" in name, _replace(" temp1", "")),
    (lambda name: "acpitz" in name, _replace("acpitz", "Motherboard")),
    (lambda name: "spd5118" in name, _replace("spd5118", "RAM")),
    (lambda name: "wifi" in name.lower(), lambda _name: "Wi-Fi"),
)


@dataclass
class ComponentGroup:
    canonical_name: str
    values: list[float]
    priority_key: int


@dataclass
class SensorClassification:
    cpu: float | None = None
    cores: list[float] = field(default_factory=list)
    groups: list[ComponentGroup] = field(default_factory=list)

    @property
    def peak_core(self) -> float:
        return max(self.cores, default=0.0)

    def as_mapping(self) -> dict[str, list[float]]:
        out = {group.canonical_name: list(group.values) for group in self.groups}
        if self.cpu is not None:
            out[CPU_BUCKET] = [self.cpu]
        if self.cores:
            out[CORE_BUCKET] = list(self.cores)
        return out


def apply_rules(rules: Sequence[Rule], name: str) -> str:
    for matches, transform in rules:
        if matches(name):
            name = transform(name)
    return name


def _role(vendor_name: str) -> str | None:
    if "core Package" in vendor_name:
        return CPU_BUCKET
    if _CORE_RE.fullmatch(vendor_name):
        return CORE_BUCKET
    return None


def normalize_label(label: str) -> str:
    """Canonical device name for a raw label; processor sensors map to their bucket."""
    name = apply_rules(VENDOR_RULES, label.strip())
    role = _role(name)
    if role is not None:
        return role
    return apply_rules(DEVICE_RULES, name).strip() or UNKNOWN_DEVICE


def _temperature(reading: Reading) -> float:
    return float(reading.value) if reading.value is not None else 0.0


def priority_key(reading: Reading) -> int:
    if COMPOSITE_MARKER in reading.label:
        return 0
    return 100000 - int(max(_temperature(reading), 0.0))


def _find_group(groups: list[ComponentGroup], name: str) -> ComponentGroup | None:
    # Prefix containment, not equality: multi-sensor devices report name variants.
    for group in groups:
        existing = group.canonical_name
        if existing.startswith(name) or name.startswith(existing):
            return group
    return None


def classify_readings(readings: Iterable[Reading]) -> SensorClassification:
    result = SensorClassification()
    devices: list[tuple[str, Reading]] = []

    for reading in readings:
        if reading.kind is not ReadingKind.TEMPERATURE:
            continue
        name = normalize_label(reading.label)
        if name == CPU_BUCKET:
            result.cpu = _temperature(reading)
        elif name == CORE_BUCKET:
            result.cores.append(_temperature(reading))
        else:
            devices.append((name, reading))

    # Composite sensors first, then hottest first. Stable, so ties keep discovery order.
    devices.sort(key=lambda item: priority_key(item[1]))
    for name, reading in devices:
        group = _find_group(result.groups, name)
        if group is None:
            result.groups.append(ComponentGroup(name, [_temperature(reading)], priority_key(reading)))
        else:
            group.values.append(_temperature(reading))
    return result


def sensor_inventory(labels: Iterable[str]) -> list[str]:
    names: list[str] = []
    for label in labels:
        name = normalize_label(label)
        if name in (CPU_BUCKET, CORE_BUCKET, "Motherboard"):
            continue
        if not any(existing.startswith(name) or name.startswith(existing) for existing in names):
            names.append(name)
    return sorted(names)
