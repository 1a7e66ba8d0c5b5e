#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""Entry Point for the executable, when the package is not installed."""

import sys

import vow

if __name__ == "__main__":
    sys.exit(vow.main())
