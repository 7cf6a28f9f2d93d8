import sys

from golf_putting.cli import main

sys.exit(main())
