import sys

from roadlink_checker.cli import main

sys.exit(main())
