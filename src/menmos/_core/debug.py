from __future__ import annotations

import os
from typing import Any


def debug(message: str, *args: Any) -> None:
    """Print a trace line when DEBUG mentions menmos (e.g. DEBUG=menmos)."""
    if "menmos" in os.getenv("DEBUG", ""):
        print(f"menmos: {message}", *args)
