"""Allow ``python -m parsecengine``."""

import sys

from parsecengine.cli import main

sys.exit(main())
