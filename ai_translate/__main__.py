"""python -m ai_translate 진입점"""

import sys

from ai_translate.cli import main

sys.exit(main())
