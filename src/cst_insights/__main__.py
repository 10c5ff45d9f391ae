"""
Allows `python -m cst_insights`.
"""

import sys

from cst_insights.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
