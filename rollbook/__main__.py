import sys

from rollbook.main import main

sys.exit(main())
