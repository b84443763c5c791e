import sys

from tilepath.cli import main

sys.exit(main())
