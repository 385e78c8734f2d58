import sys

from nfield.samples.program import main

sys.exit(main())
