"""Allow running as: python -m printshop_pricing"""

import sys

from printshop_pricing.main import main

if __name__ == "__main__":
    sys.exit(main())
