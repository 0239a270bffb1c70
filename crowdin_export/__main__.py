import sys

from crowdin_export.main import main

sys.exit(main())
