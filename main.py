#!/usr/bin/env python3
"""
Main script for running the effect direction analysis on a CSV of draws.
"""

# Pipeline overview:
# 1) Load a wide CSV of posterior (or bootstrap) draws, one column per
#    coefficient.
# 2) Summarize each coefficient: median, MAD, mean, SD and the interval at the
#    requested level.
# 3) Run the MEDP search against the minimum-effect boundary.
# 4) Print the rounded summary and export summary + long-format draws as CSV.

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from psyreport.cli import main

if __name__ == "__main__":
    sys.exit(main())
