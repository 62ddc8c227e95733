import sys

from sitehooks.cli import main

sys.exit(main())
