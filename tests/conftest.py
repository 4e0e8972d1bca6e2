#
# This file is part of redirector released under the MIT license.
# See the NOTICE for more information.

"""Pytest configuration for redirector tests."""

import os
import sys

# Add the tests directory to sys.path so the support module can be
# imported as 'support'
tests_dir = os.path.dirname(os.path.abspath(__file__))
if tests_dir not in sys.path:
    sys.path.insert(0, tests_dir)
