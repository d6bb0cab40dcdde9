from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

DEFAULT_HIDE_CURSOR_PLUGIN_URL = (
    "https://github.com/seffs/wayfire-plugins-extra-raspbian/releases/download/"
    "v0.7.5/wayfire-plugins-extra-raspbian-aarch64.tar.xz"
)


@dataclass(frozen=True)
class PluginBundle:
    """A release tarball and the files to copy out of it (relative src -> absolute dst dir)."""

    url: str
    files: Tuple[Tuple[str, str], ...]

    @property
    def archive_name(self) -> str:
        return self.url.rsplit("/", 1)[-1]

    def download_argv(self, work_dir: Path) -> List[str]:
        return ["wget", "-q", "-O", str(work_dir / self.archive_name), self.url]

    def extract_argv(self, work_dir: Path) -> List[str]:
        return ["tar", "xf", str(work_dir / self.archive_name), "-C", str(work_dir)]

    def install_argvs(self, work_dir: Path) -> List[List[str]]:
        return [["cp", str(work_dir / src), dst] for src, dst in self.files]


def hide_cursor_bundle(url: str = DEFAULT_HIDE_CURSOR_PLUGIN_URL) -> PluginBundle:
    return PluginBundle(
        url=url,
        files=(
            ("usr/share/wayfire/metadata/hide-cursor.xml", "/usr/share/wayfire/metadata/"),
            ("usr/lib/aarch64-linux-gnu/wayfire/libhide-cursor.so", "/usr/lib/aarch64-linux-gnu/wayfire/"),
        ),
    )
