import sys

from factual.cli._dispatcher import main

sys.exit(main())
