"""Entry point for ``python -m smpte_timecode``."""

import sys

from .cli import main

sys.exit(main())
