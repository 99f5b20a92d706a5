import sys

from sophena.cli import main

sys.exit(main())
