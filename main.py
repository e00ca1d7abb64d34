#!/usr/bin/env python3
# /moded/main.py
"""
moded launcher
==============

Runs the editor straight from a source checkout without installing it:

    python main.py notes.txt --mode insert

Puts ``src/`` on the import path and hands over to `moded.__main__.main`.
"""

import os
import sys

project_root = os.path.dirname(os.path.abspath(__file__))
src_dir = os.path.join(project_root, "src")
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

from moded.__main__ import main  # noqa: E402

if __name__ == "__main__":
    main()
