#!/usr/bin/env python
"""Run the alerting service with the Django development server."""

import os
import sys

from django.core.management import execute_from_command_line


def main():
    """Start ``runlocal`` with the project settings."""
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "alert_platform.settings")
    execute_from_command_line([sys.argv[0], "runlocal", *sys.argv[1:]])


if __name__ == "__main__":
    main()
