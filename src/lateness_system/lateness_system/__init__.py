"""Lateness tracking package.

Organized by feature modules (rules, lateness, allowances, deductions, reports, ...)
with a thin Flask controller layer over service/repository layers.
"""
