"""Classroom attendance package.

Organized by feature modules (teachers, students, attendance, penalties,
stats) with a thin Flask controller layer over service and repository layers.
Statistics are recomputed from raw attendance records on every request.
"""
