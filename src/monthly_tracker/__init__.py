"""Monthly Tracker package.

Attendance and membership-fee tracking for a table-tennis team, organized by
feature modules (members, attendance, fees, users) with a thin Flask
controller layer over view-model and repository layers.
"""
