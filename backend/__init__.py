"""Persistence layer for the employee records system."""
