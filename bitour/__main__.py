# Copyright 2024, Gurobi Optimization, LLC

import sys

from .cli import main

sys.exit(main())
