"""Typed telemetry models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ReadingKind(str, Enum):
    TEMPERATURE = "temperature"
    USAGE = "usage"
    FREQUENCY = "frequency"
    POWER = "power"
    OTHER = "other"


@dataclass(frozen=True)
class Reading:
    label: str
    value: float | None
    kind: ReadingKind = ReadingKind.TEMPERATURE


@dataclass(frozen=True)
class CpuMetrics:
    usage_percent: float
    core_usage: tuple[float, ...]
    core_freq_mhz: tuple[float, ...]
    core_max_freq_mhz: tuple[float, ...]


@dataclass(frozen=True)
class GpuClock:
    domain: str
    current_mhz: int
    max_mhz: int


@dataclass(frozen=True)
class GpuFan:
    percent: int
    rpm: int


@dataclass(frozen=True)
class PcieMetrics:
    rx_mb_s: int
    tx_mb_s: int
    link_gen: int
    link_width: int


@dataclass(frozen=True)
class GpuMetrics:
    usage_percent: int
    memory_util_percent: int
    temp_c: int
    power_w: int
    power_limit_w: int
    vram_used: int
    vram_total: int
    clocks: tuple[GpuClock, ...] = ()
    fans: tuple[GpuFan, ...] = ()
    pcie: PcieMetrics = field(default_factory=lambda: PcieMetrics(rx_mb_s=0, tx_mb_s=0, link_gen=0, link_width=0))


@dataclass(frozen=True)
class MemoryMetrics:
    used: int
    total: int
    swap_used: int
    swap_total: int


@dataclass(frozen=True)
class DiskMetrics:
    name: str
    used: int
    total: int
    read_bytes: int
    written_bytes: int
    total_read_bytes: int
    total_written_bytes: int


@dataclass(frozen=True)
class NetworkMetrics:
    name: str
    rx_bytes_s: int
    tx_bytes_s: int
    rx_packets_s: int
    tx_packets_s: int
    total_rx_bytes: int
    total_tx_bytes: int


@dataclass(frozen=True)
class MetricSnapshot:
    cpu: CpuMetrics
    gpu: GpuMetrics
    memory: MemoryMetrics
    disks: tuple[DiskMetrics, ...]
    network: NetworkMetrics | None
    readings: tuple[Reading, ...]
    timestamp: datetime


@dataclass(frozen=True)
class CpuInventory:
    brand: str
    cores: int


@dataclass(frozen=True)
class GpuInventory:
    name: str
    vram_total: int
    memory_max_mhz: int
    graphics_max_mhz: int
    sm_max_mhz: int
    video_max_mhz: int
    cores: int
    energy_millijoules: int
    driver: str
    performance_state: int
    cuda_version: str


@dataclass(frozen=True)
class NetworkInterface:
    name: str
    ipv4: tuple[str, ...]
    ipv6: tuple[str, ...]
    mac: str


@dataclass(frozen=True)
class HardwareInventory:
    cpu: CpuInventory
    gpus: tuple[GpuInventory, ...]
    board: str
    sensor_labels: tuple[str, ...]
    networks: tuple[NetworkInterface, ...]
