"""Attendance Tracker package.

Students and educators define subjects with weekly schedules and record
per-date attendance. The package is organized by feature modules
(schedules, subjects, attendance, users) with a thin Flask controller
layer over service and repository layers.
"""
