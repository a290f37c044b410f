"""Allow running as ``python -m hyptrack``."""

import sys

from hyptrack.cli import main

sys.exit(main())
