import sys

from coo.cli import main

sys.exit(main())
