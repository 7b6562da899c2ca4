"""Event timekeeping package.

Feature modules (entries, shifts, payroll, edits, sync, ...) with a thin Flask
controller layer over service/repository layers.
"""
