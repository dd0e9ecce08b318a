import sys

from zzsleep.runner import main

sys.exit(main())
