import sys

from git_ai_tools.cli import main

sys.exit(main())
