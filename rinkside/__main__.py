import sys

from rinkside.cli import main

sys.exit(main())
