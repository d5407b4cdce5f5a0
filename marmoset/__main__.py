"""
Lets `python -m marmoset` stand in for the installed `marmoset` command.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from marmoset.cmdline import main

main()
