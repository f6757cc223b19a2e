import sys

from investai.cli import main

sys.exit(main())
