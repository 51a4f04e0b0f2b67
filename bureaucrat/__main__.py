"""Allow ``python -m bureaucrat``."""

import sys

from .cli import main

sys.exit(main())
