import sys

from csvanalysis.cli import main

sys.exit(main())
