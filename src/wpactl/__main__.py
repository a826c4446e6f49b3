"""Allow `python -m wpactl`."""

import sys

from .service import main

sys.exit(main())
