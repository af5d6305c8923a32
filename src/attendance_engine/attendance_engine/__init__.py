"""Attendance time-accounting engine.

This package is organized by feature modules (schedules, breaks, attendance,
punctuality, overtime, ...). Computations are pure functions over explicit
inputs; services and repositories own caching and I/O.
"""
