import sys

from place_aggregator.cli import main

sys.exit(main())
