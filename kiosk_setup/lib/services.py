from __future__ import annotations


def systemctl_enable(unit: str) -> list[str]:
    return ["systemctl", "enable", unit]


def systemctl_set_default(target: str) -> list[str]:
    return ["systemctl", "set-default", target]
