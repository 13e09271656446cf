import sys

from openqs.demos import main

sys.exit(main())
