"""
This is the main file to run the game.
It imports the run function from the frogger app and runs it.
"""

import sys

from frogger.app import run

if __name__ == "__main__":
    sys.exit(run())
