import sys

from wxcontours.main import main

sys.exit(main())
