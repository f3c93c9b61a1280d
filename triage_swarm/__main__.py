"""Allow ``python -m triage_swarm``."""

import sys

from .cli import main

sys.exit(main())
