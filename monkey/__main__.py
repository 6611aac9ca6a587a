import sys

from monkey.repl import main

if __name__ == "__main__":
    sys.exit(main())
