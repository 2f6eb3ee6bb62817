#!/usr/bin/env python3
"""Sync the version from pyproject.toml into src/menmos/version.py."""
import re
import sys
import tomllib
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent


def main() -> None:
    with open(ROOT / "pyproject.toml", "rb") as f:
        new_version = tomllib.load(f)["project"]["version"]
    version_path = ROOT / "src" / "menmos" / "version.py"
    content = version_path.read_text()
    updated, count = re.subn(
        r'^(VERSION\s*=\s*")[^"]*(")',
        rf"\g<1>{new_version}\g<2>",
        content,
        count=1,
        flags=re.MULTILINE,
    )
    if count == 0:
        print("ERROR: Could not find VERSION in src/menmos/version.py", file=sys.stderr)
        sys.exit(1)
    version_path.write_text(updated)
    print(f"Synced version {new_version} to src/menmos/version.py")


if __name__ == "__main__":
    main()
