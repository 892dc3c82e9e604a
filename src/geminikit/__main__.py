import sys

from geminikit.cli import main

sys.exit(main())
