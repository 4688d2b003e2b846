"""
Flow compiler service.
"""
