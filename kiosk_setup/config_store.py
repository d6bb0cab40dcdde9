from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .lib.edid import DEFAULT_EDID_GLOB
from .lib.greetd import DEFAULT_GREETD_CONFIG
from .lib.plugins import DEFAULT_HIDE_CURSOR_PLUGIN_URL

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "~/.config/kiosk-setup.yaml"
DEFAULT_KIOSK_URL = "https://webglsamples.org/aquarium/aquarium.html"
DEFAULT_BROWSER_FLAGS = ["--incognito", "--autoplay-policy=no-user-gesture-required", "--kiosk"]


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to YAML for unknown extensions (JSON is a subset anyway).
    return "yaml"


def load_raw_config(path: str) -> Dict[str, Any]:
    p = Path(path).expanduser()
    if not p.exists():
        return {}

    text = p.read_text(encoding="utf-8")
    if _detect_format(p) == "json":
        data = json.loads(text) if text.strip() else {}
    else:
        data = yaml.safe_load(text) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping/object, got {type(data).__name__}: {p}")
    return data


def ensure_defaults(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Fill required keys with sane defaults (without overriding user values)."""

    raw.setdefault("compositor", None)
    raw.setdefault("kiosk_url", None)
    raw.setdefault("browser_package", "chromium-browser")
    raw.setdefault("browser_command", "chromium-browser")
    raw.setdefault("browser_flags", list(DEFAULT_BROWSER_FLAGS))
    raw.setdefault("output_name", "HDMI-A-1")
    raw.setdefault("edid_glob", DEFAULT_EDID_GLOB)
    # Bookworm moved the boot partition from /boot to /boot/firmware.
    raw.setdefault("boot_dir", "/boot/firmware")
    raw.setdefault("greetd_config", DEFAULT_GREETD_CONFIG)
    raw.setdefault("greetd_vt", 7)
    raw.setdefault("use_sudo", True)
    raw.setdefault("hide_cursor_plugin_url", DEFAULT_HIDE_CURSOR_PLUGIN_URL)
    return raw


@dataclass(frozen=True)
class KioskConfig:
    raw: Dict[str, Any]

    @property
    def compositor(self) -> Optional[str]:
        v = self.raw.get("compositor")
        return str(v).strip().lower() if v else None

    @property
    def kiosk_url(self) -> Optional[str]:
        v = self.raw.get("kiosk_url")
        return str(v).strip() if v else None

    @property
    def default_kiosk_url(self) -> str:
        return self.kiosk_url or DEFAULT_KIOSK_URL

    @property
    def browser_package(self) -> str:
        return str(self.raw.get("browser_package") or "chromium-browser")

    @property
    def browser_command(self) -> str:
        return str(self.raw.get("browser_command") or "chromium-browser")

    @property
    def browser_flags(self) -> List[str]:
        flags = self.raw.get("browser_flags")
        if flags is None:
            return list(DEFAULT_BROWSER_FLAGS)
        if not isinstance(flags, list):
            raise ValueError("browser_flags must be a list of strings")
        return [str(f) for f in flags]

    @property
    def output_name(self) -> str:
        return str(self.raw.get("output_name") or "HDMI-A-1")

    @property
    def edid_glob(self) -> str:
        return str(self.raw.get("edid_glob") or DEFAULT_EDID_GLOB)

    @property
    def boot_dir(self) -> Path:
        return Path(str(self.raw.get("boot_dir") or "/boot/firmware"))

    @property
    def cmdline_path(self) -> Path:
        return self.boot_dir / "cmdline.txt"

    @property
    def config_txt_path(self) -> Path:
        return self.boot_dir / "config.txt"

    @property
    def greetd_config(self) -> Path:
        return Path(str(self.raw.get("greetd_config") or DEFAULT_GREETD_CONFIG))

    @property
    def greetd_vt(self) -> int:
        return int(self.raw.get("greetd_vt") or 7)

    @property
    def use_sudo(self) -> bool:
        return bool(self.raw.get("use_sudo", True))

    @property
    def hide_cursor_plugin_url(self) -> str:
        return str(self.raw.get("hide_cursor_plugin_url") or DEFAULT_HIDE_CURSOR_PLUGIN_URL)


def load_config(path: Optional[str] = None) -> KioskConfig:
    """Load the optional config file (YAML or JSON) and apply defaults."""

    chosen = path or DEFAULT_CONFIG_PATH
    if path and not Path(path).expanduser().exists():
        raise FileNotFoundError(path)

    raw = ensure_defaults(load_raw_config(chosen))
    logger.info("Config loaded (path=%s, compositor=%s)", chosen, raw.get("compositor"))
    return KioskConfig(raw=raw)
