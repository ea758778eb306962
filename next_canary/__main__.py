import sys

from next_canary.pipeline import main

sys.exit(main())
