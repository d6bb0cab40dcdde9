"""Structured edits of the Raspberry Pi boot partition files.

cmdline.txt is a single line of space-separated kernel parameters; config.txt
is a line-oriented key=value file. All functions here are pure text transforms
suitable for `patch_file`: they preserve every byte they do not need to change
and return their input unchanged when the file is already configured.
"""

from __future__ import annotations

from typing import Iterable, Optional

CMDLINE_NAME = "cmdline.txt"
CONFIG_TXT_NAME = "config.txt"

SPLASH_TOKENS = ("quiet", "splash", "plymouth.ignore-serial-consoles")


def _require(text: Optional[str], name: str) -> str:
    if text is None:
        raise FileNotFoundError(f"{name} not found; is boot_dir correct?")
    return text


def _split_first_line(text: str) -> tuple[str, str]:
    first, sep, rest = text.partition("\n")
    return first, sep + rest


def video_token(output: str, mode: str) -> str:
    return f"video={output}:{mode}"


def get_video_mode(text: str, output: str) -> Optional[str]:
    prefix = f"video={output}:"
    first, _ = _split_first_line(text)
    for tok in first.split(" "):
        if tok.startswith(prefix):
            return tok[len(prefix):]
    return None


def set_video_mode(text: Optional[str], output: str, mode: str) -> str:
    """Set `video=<output>:<mode>` on the kernel command line.

    The line holds at most one `video=` token:

    - the desired token is already the only one: unchanged
    - any other `video=` token: the first is replaced in place, the rest dropped
    - no `video=` token: prepended to the first line, followed by a single space
    """

    text = _require(text, CMDLINE_NAME)
    first, tail = _split_first_line(text)
    desired = video_token(output, mode)

    tokens = first.split(" ")
    positions = [i for i, tok in enumerate(tokens) if tok.startswith("video=")]
    if not positions:
        new_first = f"{desired} {first}" if first else desired
        return new_first + tail
    if len(positions) == 1 and tokens[positions[0]] == desired:
        return text

    tokens[positions[0]] = desired
    for i in reversed(positions[1:]):
        del tokens[i]
    return " ".join(tokens) + tail


def ensure_tokens(text: Optional[str], wanted: Iterable[str]) -> str:
    """Append each missing token (exact match) to the end of the first line."""

    text = _require(text, CMDLINE_NAME)
    first, tail = _split_first_line(text)
    present = set(first.split())
    missing = []
    for tok in wanted:
        if tok not in present and tok not in missing:
            missing.append(tok)
    if not missing:
        return text

    joiner = "" if (not first or first.endswith(" ")) else " "
    return first + joiner + " ".join(missing) + tail


def _config_key(line: str) -> Optional[str]:
    s = line.strip()
    if not s or s.startswith("#") or s.startswith("[") or "=" not in s:
        return None
    return s.split("=", 1)[0].strip()


def get_config_value(text: str, key: str) -> Optional[str]:
    for line in text.splitlines():
        if _config_key(line) == key:
            return line.split("=", 1)[1].strip()
    return None


def set_config_value(text: Optional[str], key: str, value: str) -> str:
    """Set `key=value` in config.txt, updating the first existing line for `key`."""

    text = _require(text, CONFIG_TXT_NAME)
    desired = f"{key}={value}"
    lines = text.splitlines(keepends=True)

    for i, line in enumerate(lines):
        if _config_key(line) != key:
            continue
        if line.split("=", 1)[1].strip() == value:
            return text
        ending = line[len(line.rstrip("\r\n")):]
        lines[i] = desired + ending
        return "".join(lines)

    if text and not text.endswith("\n"):
        text += "\n"
    return text + desired + "\n"
