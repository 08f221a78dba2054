# -*- coding: utf-8 -*-
"""Allow ``python -m pixelfx``."""

import sys

from pixelfx.cli import main

sys.exit(main())
