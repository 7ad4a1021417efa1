"""
Lets you say:

    python -m scrawl program.scr

which does the same as the `scrawl` command.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from scrawl.cmdline import main

main()
