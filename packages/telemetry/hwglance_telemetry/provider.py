"""psutil/NVML telemetry provider with per-value fallbacks."""

from __future__ import annotations

import logging
import platform
import socket
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, TypeVar

import psutil
import pynvml

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

T = TypeVar("T")

logger = logging.getLogger("hwglance.telemetry")

MIN_DISK_SIZE = 8 * (1 << 30)
BOARD_NAME_PATH = Path("/sys/class/dmi/id/board_name")

CLOCK_DOMAINS = (
    ("GFX", pynvml.NVML_CLOCK_GRAPHICS),
    ("MEM", pynvml.NVML_CLOCK_MEM),
    ("SM", pynvml.NVML_CLOCK_SM),
    ("VID", pynvml.NVML_CLOCK_VIDEO),
)


class SourceInitError(RuntimeError):
    """Hardware inventory could not be enumerated at startup."""


def _nvml(call: Callable[..., T], *args: Any, default: T) -> T:
    try:
        return call(*args)
    except pynvml.NVMLError as exc:
        logger.debug("nvml read failed: %s: %s", call.__name__, exc)
        return default


def _text(value: str | bytes) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", "ignore")
    return value


def read_board_name() -> str:
    if platform.system() == "Linux":
        try:
            name = BOARD_NAME_PATH.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise SourceInitError(f"No motherboard identity: {exc}") from exc
    else:
        name = platform.node()
    if not name:
        raise SourceInitError("No motherboard identity")
    return name


def skip_interface(name: str, total_rx: int, total_tx: int) -> bool:
    return "veth" in name or name == "lo" or name.startswith("br-") or (total_rx == 0 and total_tx == 0)


def _sensor_readings() -> list[Reading]:
    try:
        temps = psutil.sensors_temperatures()
    except (AttributeError, OSError) as exc:
        # sensors_temperatures() is missing outside Linux/FreeBSD.
        logger.debug("temperature sensors unavailable: %s", exc)
        return []

    readings: list[Reading] = []
    for chip, entries in temps.items():
        for entry in entries:
            label = f"{chip} {entry.label}".strip()
            readings.append(Reading(label=label, value=entry.current, kind=ReadingKind.TEMPERATURE))
    return readings


@dataclass
class _CounterSnapshot:
    ts: float
    disks: dict[str, tuple[int, int]] = field(default_factory=dict)
    nics: dict[str, tuple[int, int, int, int]] = field(default_factory=dict)


class TelemetryProvider:
    """Owns the psutil and NVML handles and materializes one sample per refresh."""

    def __init__(self, gpu_index: int = 0) -> None:
        try:
            pynvml.nvmlInit()
        except pynvml.NVMLError as exc:
            raise SourceInitError(f"NVML unavailable: {exc}") from exc
        try:
            count = pynvml.nvmlDeviceGetCount()
            if count <= gpu_index:
                raise SourceInitError(f"No GPU at index {gpu_index} ({count} present)")
            self._gpu = pynvml.nvmlDeviceGetHandleByIndex(gpu_index)
        except pynvml.NVMLError as exc:
            raise SourceInitError(f"GPU enumeration failed: {exc}") from exc
        self.board = read_board_name()

        # Prime psutil's interval-less CPU percentages.
        psutil.cpu_percent(interval=None)
        psutil.cpu_percent(interval=None, percpu=True)
        self._prev = self._counters()
        self._curr = self._prev
        self._readings: list[Reading] = []
        logger.info("telemetry provider ready", extra={"event": "provider_ready", "board": self.board})

    def close(self) -> None:
        _nvml(pynvml.nvmlShutdown, default=None)

    def _counters(self) -> _CounterSnapshot:
        snap = _CounterSnapshot(ts=time.monotonic())
        for name, io in (psutil.disk_io_counters(perdisk=True) or {}).items():
            snap.disks[name] = (io.read_bytes, io.write_bytes)
        for name, io in (psutil.net_io_counters(pernic=True) or {}).items():
            snap.nics[name] = (io.bytes_recv, io.bytes_sent, io.packets_recv, io.packets_sent)
        return snap

    def refresh(self) -> None:
        self._prev = self._curr
        self._curr = self._counters()
        self._readings = _sensor_readings()

    def list_readings(self) -> list[Reading]:
        return list(self._readings)

    def list_components(self) -> list[tuple[str, float | None, str]]:
        return [(r.label, r.value, r.label.split(" ", 1)[0]) for r in self._readings]

    @property
    def _elapsed(self) -> float:
        return max(self._curr.ts - self._prev.ts, 1e-6)

    def _rate(self, curr: int, prev: int) -> int:
        return int(max(curr - prev, 0) / self._elapsed)

    def cpu(self) -> CpuMetrics:
        freqs = psutil.cpu_freq(percpu=True) or []
        return CpuMetrics(
            usage_percent=float(psutil.cpu_percent(interval=None)),
            core_usage=tuple(float(p) for p in psutil.cpu_percent(interval=None, percpu=True)),
            core_freq_mhz=tuple(float(f.current) for f in freqs),
            core_max_freq_mhz=tuple(float(f.max) for f in freqs),
        )

    def memory(self) -> MemoryMetrics:
        vm = psutil.virtual_memory()
        sw = psutil.swap_memory()
        return MemoryMetrics(used=int(vm.used), total=int(vm.total), swap_used=int(sw.used), swap_total=int(sw.total))

    def gpu(self) -> GpuMetrics:
        h = self._gpu
        util = _nvml(pynvml.nvmlDeviceGetUtilizationRates, h, default=None)
        mem = _nvml(pynvml.nvmlDeviceGetMemoryInfo, h, default=None)
        clocks = tuple(
            GpuClock(
                domain=domain,
                current_mhz=_nvml(pynvml.nvmlDeviceGetClockInfo, h, clock, default=0),
                max_mhz=_nvml(pynvml.nvmlDeviceGetMaxClockInfo, h, clock, default=0),
            )
            for domain, clock in CLOCK_DOMAINS
        )
        fans = tuple(
            GpuFan(
                percent=_nvml(pynvml.nvmlDeviceGetFanSpeed_v2, h, i, default=0),
                rpm=self._fan_rpm(i),
            )
            for i in range(_nvml(pynvml.nvmlDeviceGetNumFans, h, default=1))
        )
        pcie = PcieMetrics(
            # Throughput is reported in KB/s.
            rx_mb_s=_nvml(pynvml.nvmlDeviceGetPcieThroughput, h, pynvml.NVML_PCIE_UTIL_RX_BYTES, default=0) // 1000,
            tx_mb_s=_nvml(pynvml.nvmlDeviceGetPcieThroughput, h, pynvml.NVML_PCIE_UTIL_TX_BYTES, default=0) // 1000,
            link_gen=_nvml(pynvml.nvmlDeviceGetMaxPcieLinkGeneration, h, default=0),
            link_width=_nvml(pynvml.nvmlDeviceGetMaxPcieLinkWidth, h, default=0),
        )
        return GpuMetrics(
            usage_percent=int(util.gpu) if util is not None else 0,
            memory_util_percent=int(util.memory) if util is not None else 0,
            temp_c=_nvml(pynvml.nvmlDeviceGetTemperature, h, pynvml.NVML_TEMPERATURE_GPU, default=0),
            power_w=_nvml(pynvml.nvmlDeviceGetPowerUsage, h, default=0) // 1000,
            power_limit_w=_nvml(pynvml.nvmlDeviceGetPowerManagementLimit, h, default=0) // 1000,
            vram_used=int(mem.used) if mem is not None else 0,
            vram_total=int(mem.total) if mem is not None else 0,
            clocks=clocks,
            fans=fans,
            pcie=pcie,
        )

    def _fan_rpm(self, fan: int) -> int:
        # NVML only reports RPM for the first fan.
        if fan != 0:
            return 0
        return int(_nvml(pynvml.nvmlDeviceGetFanSpeedRPM, self._gpu, default=0))

    def disks(self) -> list[DiskMetrics]:
        out: list[DiskMetrics] = []
        seen: set[str] = set()
        for part in psutil.disk_partitions(all=False):
            name = part.device.removeprefix("/dev/")
            if name in seen:
                continue
            try:
                usage = psutil.disk_usage(part.mountpoint)
            except OSError as exc:
                logger.debug("disk usage failed for %s: %s", part.mountpoint, exc)
                continue
            if usage.total <= MIN_DISK_SIZE:
                continue
            seen.add(name)
            total_read, total_written = self._curr.disks.get(name, (0, 0))
            prev_read, prev_written = self._prev.disks.get(name, (total_read, total_written))
            out.append(
                DiskMetrics(
                    name=name,
                    used=int(usage.total - usage.free),
                    total=int(usage.total),
                    read_bytes=self._rate(total_read, prev_read),
                    written_bytes=self._rate(total_written, prev_written),
                    total_read_bytes=total_read,
                    total_written_bytes=total_written,
                )
            )
        return out

    def network(self) -> NetworkMetrics | None:
        candidates = [
            (name, counters)
            for name, counters in self._curr.nics.items()
            if not skip_interface(name, counters[0], counters[1])
        ]
        if not candidates:
            return None
        name, (rx, tx, prx, ptx) = max(candidates, key=lambda item: item[1][0] + item[1][1])
        prev_rx, prev_tx, prev_prx, prev_ptx = self._prev.nics.get(name, (rx, tx, prx, ptx))
        return NetworkMetrics(
            name=name,
            rx_bytes_s=self._rate(rx, prev_rx),
            tx_bytes_s=self._rate(tx, prev_tx),
            rx_packets_s=self._rate(prx, prev_prx),
            tx_packets_s=self._rate(ptx, prev_ptx),
            total_rx_bytes=rx,
            total_tx_bytes=tx,
        )

    def snapshot(self) -> MetricSnapshot:
        return MetricSnapshot(
            cpu=self.cpu(),
            gpu=self.gpu(),
            memory=self.memory(),
            disks=tuple(self.disks()),
            network=self.network(),
            readings=tuple(self._readings),
            timestamp=datetime.now(timezone.utc),
        )

    def inventory(self) -> HardwareInventory:
        brand = platform.processor()
        try:
            with open("/proc/cpuinfo", "r", encoding="utf-8", errors="ignore") as f:
                for line in f:
                    if line.startswith("model name"):
                        brand = line.split(":", 1)[1].strip()
                        break
        except OSError:
            pass

        gpus = []
        driver = _text(_nvml(pynvml.nvmlSystemGetDriverVersion, default=""))
        cuda = _nvml(pynvml.nvmlSystemGetCudaDriverVersion, default=0)
        cuda_version = f"{cuda // 1000}.{cuda % 1000 // 10}" if cuda else "N/A"
        for i in range(_nvml(pynvml.nvmlDeviceGetCount, default=0)):
            try:
                h = pynvml.nvmlDeviceGetHandleByIndex(i)
            except pynvml.NVMLError as exc:
                raise SourceInitError(f"GPU {i} enumeration failed: {exc}") from exc
            mem = _nvml(pynvml.nvmlDeviceGetMemoryInfo, h, default=None)
            gpus.append(
                GpuInventory(
                    name=_text(_nvml(pynvml.nvmlDeviceGetName, h, default="GPU")),
                    vram_total=int(mem.total) if mem is not None else 0,
                    memory_max_mhz=_nvml(pynvml.nvmlDeviceGetMaxClockInfo, h, pynvml.NVML_CLOCK_MEM, default=0),
                    graphics_max_mhz=_nvml(pynvml.nvmlDeviceGetMaxClockInfo, h, pynvml.NVML_CLOCK_GRAPHICS, default=0),
                    sm_max_mhz=_nvml(pynvml.nvmlDeviceGetMaxClockInfo, h, pynvml.NVML_CLOCK_SM, default=0),
                    video_max_mhz=_nvml(pynvml.nvmlDeviceGetMaxClockInfo, h, pynvml.NVML_CLOCK_VIDEO, default=0),
                    cores=_nvml(pynvml.nvmlDeviceGetNumGpuCores, h, default=0),
                    energy_millijoules=_nvml(pynvml.nvmlDeviceGetTotalEnergyConsumption, h, default=0),
                    driver=driver,
                    performance_state=_nvml(pynvml.nvmlDeviceGetPerformanceState, h, default=0),
                    cuda_version=cuda_version,
                )
            )

        counters = psutil.net_io_counters(pernic=True) or {}
        networks = []
        for name, addrs in psutil.net_if_addrs().items():
            io = counters.get(name)
            if io is None or skip_interface(name, io.bytes_recv, io.bytes_sent):
                continue
            networks.append(
                NetworkInterface(
                    name=name,
                    ipv4=tuple(a.address for a in addrs if a.family == socket.AF_INET),
                    ipv6=tuple(a.address for a in addrs if a.family == socket.AF_INET6),
                    mac=next((a.address for a in addrs if a.family == psutil.AF_LINK), ""),
                )
            )

        return HardwareInventory(
            cpu=CpuInventory(brand=brand, cores=psutil.cpu_count(logical=True) or 0),
            gpus=tuple(gpus),
            board=self.board,
            sensor_labels=tuple(r.label for r in _sensor_readings()),
            networks=tuple(networks),
        )
