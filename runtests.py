#!/usr/bin/env python

import os
import sys

BASE_DIR = os.path.abspath(os.path.dirname(__file__))
sys.path.append(BASE_DIR)

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "mocatalog.tests.settings")

import django
from django.conf import settings
from django.test.utils import get_runner


django.setup()

# Current module (``tests``) and its submodules.
test_cases = ['mocatalog']

# Allow running a single test module or case from the command line.
offset = 1
try:
    sys.argv[1]
except IndexError:
    pass
else:
    option = sys.argv[1].startswith('-')
    if not option:
        test_cases = [sys.argv[1]]
        offset = 2

# ``verbosity`` can be overwritten from command line.
verbosity = 2
for arg in sys.argv[offset:]:
    if arg.startswith('--verbosity='):
        verbosity = int(arg.split('=', 1)[1])

TestRunner = get_runner(settings)
failures = TestRunner(verbosity=verbosity).run_tests(test_cases)
sys.exit(bool(failures))
