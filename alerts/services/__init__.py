"""Services for the alerting application.

Modules are imported directly (``alerts.services.<module>``); channels
depend on the email service, so nothing is re-exported here.
"""
