#!/usr/bin/env python3
"""
Allow running the suite tools as a module: python -m anyteam_e2e

This enables the following usage:
    python -m anyteam_e2e [OPTIONS] COMMAND

Which is equivalent to:
    anyteam-e2e [OPTIONS] COMMAND
"""

from anyteam_e2e.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
