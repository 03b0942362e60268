"""Allow ``python -m colorpass``."""

import sys

from .cli import main

sys.exit(main())
