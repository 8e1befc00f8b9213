"""
Web layer for the Tenant Vacancy Engine.
"""
