import sys

from pingserver.server import main

sys.exit(main())
