import sys

from imagebot.main import main

sys.exit(main())
