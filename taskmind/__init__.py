# -*- coding: utf-8 -*-
"""taskmind: context-aware personal task manager backend."""

__version__ = "0.1.0"
