#!/usr/bin/env python3
"""
TemplateTree - A module template editor and generator.

Entry point for the application.
"""

from templatetree.app import run

if __name__ == "__main__":
    run()
