"""Hardware telemetry models, sensor classification, and the psutil/NVML provider."""

from .models import (
    CpuInventory,
    CpuMetrics,
    DiskMetrics,
    GpuClock,
    GpuFan,
    GpuInventory,
    GpuMetrics,
    HardwareInventory,
    MemoryMetrics,
    MetricSnapshot,
    NetworkInterface,
    NetworkMetrics,
    PcieMetrics,
    Reading,
    ReadingKind,
)
from .sensors import ComponentGroup, SensorClassification, classify_readings, normalize_label, sensor_inventory

__all__ = [
    "ComponentGroup",
    "CpuInventory",
    "CpuMetrics",
    "DiskMetrics",
    "GpuClock",
    "GpuFan",
    "GpuInventory",
    "GpuMetrics",
    "HardwareInventory",
    "MemoryMetrics",
    "MetricSnapshot",
    "NetworkInterface",
    "NetworkMetrics",
    "PcieMetrics",
    "Reading",
    "ReadingKind",
    "SensorClassification",
    "classify_readings",
    "normalize_label",
    "sensor_inventory",
]
