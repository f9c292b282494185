import sys

from gencoder.cli import main

sys.exit(main())
