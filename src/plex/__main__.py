"""Allow ``python -m src.plex``."""

import sys

from .cli import main

sys.exit(main())
