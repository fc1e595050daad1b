import sys

from invindex.client.cli import main

sys.exit(main())
