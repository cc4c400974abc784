"""
API Module
==========

This module provides the web server for the cleaning calculator page and
its JSON API.

Routes:
    / - Calculator page
    /api/templates - Scenario templates
    /api/simulate - Simulation execution
    /api/export/data - Data export
"""
