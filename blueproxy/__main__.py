import sys

from blueproxy.cli import main

sys.exit(main())
