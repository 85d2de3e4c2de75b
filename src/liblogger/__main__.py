import sys

from liblogger.demo import main

if __name__ == "__main__":
    main(panic="--panic" in sys.argv[1:])
