"""Entry point for `python -m logtest`."""

import sys

from logtest.presentation.cli import main

sys.exit(main())
