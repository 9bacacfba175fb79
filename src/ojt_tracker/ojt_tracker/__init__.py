"""OJT Tracker package.

Internship (on-the-job training) tracking backend organized by feature
modules (users, interns, dtr, leaves, ...) with a thin Flask controller layer
over service/repository layers.
"""
