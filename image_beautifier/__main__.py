import sys

from image_beautifier.api.cli import main

sys.exit(main())
