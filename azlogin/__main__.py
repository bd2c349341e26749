import sys

from azlogin import main

sys.exit(main())
