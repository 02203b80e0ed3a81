# -*- coding: utf-8 -*-
"""Domain layer: models, rules, ports and the storage selector. No sqlite. No HTTP."""
