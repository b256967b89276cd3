import sys

from logwatch.main import main

sys.exit(main())
