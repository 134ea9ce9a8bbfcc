"""One-shot hardware inventory text."""

from __future__ import annotations

from hwglance_telemetry.models import GpuInventory, HardwareInventory, NetworkInterface
from hwglance_telemetry.sensors import sensor_inventory

from .dashboard import format_tenths
from .models import Palette
from .units import GIB, round_half_away


def clean_cpu_brand(brand: str) -> str:
    for noise in ("(R)", "(TM)", "Intel ", "Core "):
        brand = brand.replace(noise, "")
    return brand.strip()


def clean_gpu_name(name: str) -> str:
    return name.replace("NVIDIA ", "").replace("GeForce ", "").strip()


def _branch(palette: Palette, color: str, last: bool) -> str:
    return f"{palette.dim}{color}{'└─' if last else '├─'}{palette.reset}"


def _gpu_lines(gpu: GpuInventory, p: Palette) -> list[str]:
    tab = _branch(p, p.magenta, last=False)
    vram_gb = gpu.vram_total / GIB
    # Hundredths of a megajoule.
    energy_mj = round_half_away(gpu.energy_millijoules / 1e7) / 100
    return [
        f"{p.magenta}GPU{p.reset} {clean_gpu_name(gpu.name)}",
        f"{tab} VRAM {p.green}{format_tenths(vram_gb)}GB{p.reset} {p.blue}{gpu.memory_max_mhz}MHz{p.reset}",
        f"{tab} Clock {p.dim}Gfx{p.reset} {p.blue}{gpu.graphics_max_mhz}MHz{p.reset}"
        f"  {p.dim}SM{p.reset} {p.blue}{gpu.sm_max_mhz}MHz{p.reset}"
        f"  {p.dim}Vid{p.reset} {p.blue}{gpu.video_max_mhz}MHz{p.reset}",
        f"{tab} Cores {p.blue}{gpu.cores}{p.reset}",
        f"{tab} Consumed {p.blue}{energy_mj:g}MJ{p.reset}",
        f"{tab} Driver {p.blue}{gpu.driver}{p.reset}",
        f"{tab} Perf {p.blue}{gpu.performance_state}{p.reset} {p.dim}(0-15, 0 = max){p.reset}",
        f"{_branch(p, p.magenta, last=True)} CUDA {p.blue}{gpu.cuda_version}{p.reset}",
    ]


def _network_line(net: NetworkInterface, p: Palette, last: bool) -> str:
    addrs = [f"ipv4[{p.dim}{a}{p.reset}]" for a in net.ipv4]
    addrs += [f"ipv6[{p.dim}{a}{p.reset}]" for a in net.ipv6]
    return f"{_branch(p, p.cyan, last)} {p.blue}{net.name}{p.reset} {', '.join(addrs)} mac[{p.dim}{net.mac}{p.reset}]"


def render_static_summary(inventory: HardwareInventory, palette: Palette) -> str:
    p = palette
    lines = [f"{p.sky}CPU{p.reset} {clean_cpu_brand(inventory.cpu.brand)} {p.blue}x{inventory.cpu.cores} Cores{p.reset}"]
    for gpu in inventory.gpus:
        lines.extend(_gpu_lines(gpu, p))

    lines.append(f"{p.red}MOBO{p.reset} {inventory.board}")
    names = sensor_inventory(inventory.sensor_labels)
    for i, name in enumerate(names):
        lines.append(f"{_branch(p, p.red, last=i == len(names) - 1)} {name}")

    lines.append(f"{p.cyan}Networks{p.reset} ")
    for i, net in enumerate(inventory.networks):
        lines.append(_network_line(net, p, last=i == len(inventory.networks) - 1))
    return "\n".join(lines) + "\n"
