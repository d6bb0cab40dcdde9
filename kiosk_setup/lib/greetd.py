from __future__ import annotations

DEFAULT_GREETD_CONFIG = "/etc/greetd/config.toml"
GREETD_SERVICE = "greetd"
GRAPHICAL_TARGET = "graphical.target"


def render_greetd_config(*, session_command: str, user: str, vt: int = 7) -> str:
    """Render greetd's config.toml. The file is always regenerated, never merged."""

    return (
        "[terminal]\n"
        f"vt = {vt}\n"
        "[default_session]\n"
        f'command = "{session_command}"\n'
        f'user = "{user}"\n'
    )
