import sys

from resumark.app import main

if __name__ == '__main__':
    sys.exit(main())
