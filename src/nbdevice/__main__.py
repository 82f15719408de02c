"""nbdevice CLI - Entry point when run as module"""

from nbdevice.cli import main

if __name__ == "__main__":
    main()
