import sys

from ejudge_scraper.cli import main

sys.exit(main())
