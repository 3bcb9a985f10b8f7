"""distribution-rights CLI entry point: python -m distribution_rights"""

import sys

from distribution_rights.cli import main

if __name__ == "__main__":
    sys.exit(main())
