import sys

from apo2cdsp.cli import main

if __name__ == "__main__":
    sys.exit(main())
