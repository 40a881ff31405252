import sys

from quarto_export.cli import main

sys.exit(main())
