import sys

from ricker_sim.cli import main

sys.exit(main())
