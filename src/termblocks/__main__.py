import sys

from termblocks.cli import main

sys.exit(main())
