import sys

from omniwave.cli import main

sys.exit(main())
