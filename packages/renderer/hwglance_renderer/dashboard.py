"""Dashboard frame composer for the live terminal view."""

from __future__ import annotations

from hwglance_telemetry.models import DiskMetrics, GpuMetrics, MetricSnapshot, NetworkMetrics
from hwglance_telemetry.sensors import SensorClassification, classify_readings

from .encoder import VisualEncoder
from .models import Frame, Palette
from .table import layout_rows
from .units import format_size, format_temp, percent_of, ratio_bar_percent, round_half_away

CAPACITY_BAR_WIDTH = 14

# MB/s per lane after line encoding overhead.
PCIE_LANE_MB_S = {1: 250, 2: 500, 3: 985, 4: 1969, 5: 3938}
PCIE_DEFAULT_LANE_MB_S = 1969


def pcie_ceiling_mb_s(link_gen: int, link_width: int) -> int:
    return PCIE_LANE_MB_S.get(link_gen, PCIE_DEFAULT_LANE_MB_S) * link_width


def format_tenths(value: float) -> str:
    whole, frac = divmod(round_half_away(value * 10), 10)
    return f"{whole}" if frac == 0 else f"{whole}.{frac}"


class DashboardRenderer:
    """Builds the ordered lines of one refresh."""

    def __init__(self, palette: Palette, extended: bool = False) -> None:
        self.palette = palette
        self.extended = extended
        self.encoder = VisualEncoder(palette)

    def render(self, snapshot: MetricSnapshot) -> Frame:
        sensors = classify_readings(snapshot.readings)
        lines: list[str] = []
        lines.extend(self._utilization_lines(snapshot, sensors))
        lines.extend(self._memory_lines(snapshot))
        lines.extend(self._core_lines(snapshot, sensors))
        lines.append(self._clock_line(snapshot.gpu))
        lines.append(self._fan_line(snapshot.gpu))
        lines.append(self._pcie_line(snapshot.gpu))
        if snapshot.network is not None:
            lines.append(self._network_line(snapshot.network))
        lines.extend(self._disk_lines(snapshot.disks))
        if self.extended:
            lines.extend(self._sensor_lines(sensors))
        return Frame(lines=tuple(lines))

    def _utilization_lines(self, s: MetricSnapshot, sensors: SensorClassification) -> list[str]:
        p, enc = self.palette, self.encoder
        cpu_usage = round_half_away(s.cpu.usage_percent)
        cpu_temp = format_temp(sensors.cpu)
        gpu = s.gpu
        power_pct = percent_of(gpu.power_w, gpu.power_limit_w)
        cpu_line = (
            f" {p.green}CPU{p.reset}{enc.color(cpu_usage)}{cpu_usage:>3}%{p.reset}"
            f"{enc.color(cpu_temp)}{cpu_temp:>4}°C{p.reset}"
        )
        gpu_line = (
            f" {p.magenta}GPU{p.reset}{enc.color(gpu.usage_percent)}{gpu.usage_percent:>3}%{p.reset}"
            f"{enc.color(gpu.temp_c)}{gpu.temp_c:>4}°C {p.reset}"
            f"{enc.color(power_pct)}{gpu.power_w:>3}W{p.reset}{p.dim}/{p.reset}"
            f"{enc.color(power_pct)}{gpu.power_limit_w}W{p.reset}"
        )
        return [cpu_line, gpu_line]

    def _memory_lines(self, s: MetricSnapshot) -> list[str]:
        p, enc = self.palette, self.encoder
        mem, gpu = s.memory, s.gpu
        ram = enc.capacity_bar(mem.used, mem.total, CAPACITY_BAR_WIDTH)
        swap = enc.usage(mem.swap_used, mem.swap_total)
        vram = enc.capacity_bar(gpu.vram_used, gpu.vram_total, CAPACITY_BAR_WIDTH)
        mem_util = gpu.memory_util_percent
        return [
            f" {p.red}RAM{p.reset} {ram}  {swap}",
            f"{p.red}VRAM {p.reset}{vram}     {enc.paint(f'{mem_util}%', mem_util)}",
        ]

    def _core_lines(self, s: MetricSnapshot, sensors: SensorClassification) -> list[str]:
        p, enc = self.palette, self.encoder
        cores = [int(u) for u in s.cpu.core_usage]
        freqs = [
            percent_of(freq, rated)
            for freq, rated in zip(s.cpu.core_freq_mhz, s.cpu.core_max_freq_mhz)
        ]
        temps = [format_temp(t) for t in sensors.cores]
        span = max(len(cores), len(freqs), len(temps))

        def pad(values: list[int]) -> str:
            # Keeps the peak value column aligned when rows have fewer bars.
            return " " * (span - len(values) + 1)

        peak_core = max(cores, default=0)
        peak_freq = max(freqs, default=0)
        peak_temp = format_temp(sensors.peak_core)

        ratings = [round_half_away(r) for r in s.cpu.core_max_freq_mhz]
        low, high = min(ratings, default=0), max(ratings, default=0)
        rating = f"{low}MHz" if low == high else f"{low}-{high}MHz"
        freq_text = f"{peak_freq}%"

        return [
            f"{p.blue}CORE{p.reset} {enc.bars(cores)}{pad(cores)}{enc.paint(f'{peak_core}%', peak_core)}",
            f"{p.blue}FREQ{p.reset} {enc.bars(freqs)}{pad(freqs)}"
            f"{enc.paint(f'{freq_text:<5}', peak_freq)}{p.dim}{rating}{p.reset}",
            f"{p.blue}TEMP{p.reset} {enc.bars(temps)}{pad(temps)}{enc.paint(f'{peak_temp}C', peak_temp)}",
        ]

    def _clock_line(self, gpu: GpuMetrics) -> str:
        p, enc = self.palette, self.encoder
        parts = []
        for clock in gpu.clocks:
            percent = ratio_bar_percent(clock.current_mhz, clock.max_mhz)
            parts.append(f"{p.dim}{clock.domain}{p.reset} {enc.paint(enc.bar(percent), percent)}")
        return f"{p.blue}CLCK{p.reset} " + "  ".join(parts)

    def _fan_line(self, gpu: GpuMetrics) -> str:
        p, enc = self.palette, self.encoder
        fans = ", ".join(
            f"{enc.paint(f'{fan.percent}%', fan.percent)} {p.dim}{fan.rpm:>4}rpm{p.reset}" for fan in gpu.fans
        )
        return f"{p.sky}FANS{p.reset} {fans}"

    def _pcie_line(self, gpu: GpuMetrics) -> str:
        p, enc = self.palette, self.encoder
        pcie = gpu.pcie
        ceiling = pcie_ceiling_mb_s(pcie.link_gen, pcie.link_width)
        rx_pct = percent_of(pcie.rx_mb_s, ceiling)
        tx_pct = percent_of(pcie.tx_mb_s, ceiling)
        return (
            f"{p.sky}PCIE{p.reset} {p.green}▼{p.reset}{enc.paint(f'{pcie.rx_mb_s:>4}M', rx_pct)}"
            f"  {p.magenta}▲{p.reset}{enc.paint(f'{pcie.tx_mb_s:>4}M', tx_pct)}"
            f"   {p.dim}{format_tenths(ceiling / 1000)}GB/s{p.reset}"
        )

    def _network_line(self, net: NetworkMetrics) -> str:
        p = self.palette
        rx, tx = net.rx_bytes_s // 1024, net.tx_bytes_s // 1024
        return (
            f"{p.sky}NETW{p.reset} {p.green}▼{p.reset}{p.blue}{rx:>4}K{p.reset}"
            f"  {p.magenta}▲{p.reset}{p.blue}{tx:>4}K{p.reset}"
            f" {p.green}{net.rx_packets_s:>4}{p.reset}/{p.magenta}{net.tx_packets_s:<4}{p.reset}"
            f" {p.cyan}pkt/s{p.reset}  {p.dim}{net.name}{p.reset}"
        )

    def _disk_lines(self, disks: tuple[DiskMetrics, ...]) -> list[str]:
        p, enc = self.palette, self.encoder
        rows = []
        for disk in disks:
            rw = f"{p.green}{format_size(disk.read_bytes):>4}{p.reset}/{p.magenta}{format_size(disk.written_bytes):<4}{p.reset}"
            total_rw = (
                f"{p.green}{format_size(disk.total_read_bytes)}{p.reset}"
                f"/{p.magenta}{format_size(disk.total_written_bytes)}{p.reset}"
            )
            rows.append(f"{p.sky}{disk.name}{p.reset};{enc.usage(disk.used, disk.total)};{rw};Tot {total_rw}")
        return layout_rows(rows).splitlines()

    def _sensor_lines(self, sensors: SensorClassification) -> list[str]:
        p, enc = self.palette, self.encoder
        rows = []
        for group in sensors.groups:
            temps = ", ".join(enc.paint(f"{format_temp(t)}°C", format_temp(t)) for t in group.values)
            rows.append(f"{p.blue}{group.canonical_name}{p.reset} ;{temps}")
        return layout_rows(rows).splitlines()


def compose_frame(snapshot: MetricSnapshot, palette: Palette, extended: bool = False) -> Frame:
    return DashboardRenderer(palette, extended=extended).render(snapshot)
