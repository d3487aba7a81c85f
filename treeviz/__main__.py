import sys

from treeviz.cli import main

sys.exit(main())
