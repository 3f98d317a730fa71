import sys

from liquiprops.cli import main

sys.exit(main())
