# Allow running as: python -m mcpsync
import sys

from mcpsync.cli import main

sys.exit(main())
