"""Raspberry Pi kiosk provisioning (interactive, step-gated).

Core design goals:
- One step engine, parameterized by a compositor profile
- Every step gated by a yes/no prompt
- Idempotent, structured edits of boot and compositor files
- External command failures are surfaced, not swallowed
- Centralized logging
"""

__version__ = "1.1.0"

__all__ = ["__version__"]
