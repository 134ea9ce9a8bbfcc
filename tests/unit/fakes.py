"""Snapshot and inventory builders shared by the renderer and loop tests."""

import sys
from datetime import datetime, timezone
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "telemetry"))

from hwglance_telemetry.models import (
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
)

GIB = 1 << 30


def make_readings():
    return (
        Reading("coretemp Package id 0", 55.0),
        Reading("coretemp Core 0", 40.0),
        Reading("coretemp Core 1", 60.0),
        Reading("acpitz", 27.8),
        Reading("nvme Composite", 38.0),
        Reading("nvme Sensor 1", 41.0),
        Reading("spd5118", 44.5),
    )


def make_snapshot(network=True, readings=None):
    return MetricSnapshot(
        cpu=CpuMetrics(
            usage_percent=12.4,
            core_usage=(10.0, 90.0),
            core_freq_mhz=(1000.0, 4000.0),
            core_max_freq_mhz=(4000.0, 4000.0),
        ),
        gpu=GpuMetrics(
            usage_percent=40,
            memory_util_percent=7,
            temp_c=65,
            power_w=150,
            power_limit_w=300,
            vram_used=6 * GIB,
            vram_total=24 * GIB,
            clocks=(
                GpuClock("GFX", 1000, 2000),
                GpuClock("MEM", 10000, 10000),
                GpuClock("SM", 0, 2000),
                GpuClock("VID", 0, 0),
            ),
            fans=(GpuFan(45, 1500), GpuFan(47, 1520)),
            pcie=PcieMetrics(rx_mb_s=100, tx_mb_s=50, link_gen=4, link_width=16),
        ),
        memory=MemoryMetrics(used=16 * GIB, total=64 * GIB, swap_used=0, swap_total=8 * GIB),
        disks=(
            DiskMetrics(
                name="nvme0n1p2",
                used=50 * GIB,
                total=100 * GIB,
                read_bytes=2048,
                written_bytes=0,
                total_read_bytes=3 * GIB,
                total_written_bytes=GIB,
            ),
            DiskMetrics(
                name="sda1",
                used=900 * GIB,
                total=1024 * GIB,
                read_bytes=0,
                written_bytes=0,
                total_read_bytes=0,
                total_written_bytes=0,
            ),
        ),
        network=(
            NetworkMetrics(
                name="eth0",
                rx_bytes_s=10240,
                tx_bytes_s=2048,
                rx_packets_s=12,
                tx_packets_s=3,
                total_rx_bytes=10**9,
                total_tx_bytes=10**8,
            )
            if network
            else None
        ),
        readings=make_readings() if readings is None else tuple(readings),
        timestamp=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )


def make_inventory():
    return HardwareInventory(
        cpu=CpuInventory(brand="13th Gen Intel(R) Core(TM) i9-13900K", cores=32),
        gpus=(
            GpuInventory(
                name="NVIDIA GeForce RTX 4090",
                vram_total=24 * GIB,
                memory_max_mhz=10501,
                graphics_max_mhz=3105,
                sm_max_mhz=3105,
                video_max_mhz=2415,
                cores=16384,
                energy_millijoules=1_234_000_000,
                driver="550.54",
                performance_state=2,
                cuda_version="12.4",
            ),
        ),
        board="PRIME Z790-P",
        sensor_labels=("coretemp Core 0", "acpitz", "nvme Composite", "nvme Sensor 1", "spd5118", "iwlwifi_1"),
        networks=(
            NetworkInterface(name="eth0", ipv4=("192.168.1.5",), ipv6=("fe80::1",), mac="aa:bb:cc:dd:ee:ff"),
            NetworkInterface(name="wlan0", ipv4=(), ipv6=(), mac="11:22:33:44:55:66"),
        ),
    )
