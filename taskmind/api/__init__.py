# -*- coding: utf-8 -*-
"""HTTP JSON API. Public entry point: taskmind.api.app.create_app."""
