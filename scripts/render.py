# scripts/render.py
"""
Launcher for the svg2png icon renderer from a source checkout.

Equivalent to the installed `svg2png` command:
    python scripts/render.py -z 1.5 icons/svg icons/png
"""

import os
import sys

# Ensure the project root is in the Python path
script_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.dirname(script_dir)
sys.path.insert(0, project_root)

from svg2png.render import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
