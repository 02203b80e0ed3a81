# -*- coding: utf-8 -*-
"""Infrastructure adapters (clock, sqlite, in-memory storage)."""
