"""
GymOS - Access Control Core
===========================
Permission catalog, actor context resolution, access gate and navigation
filtering for the multi-tenant gym management platform.
"""
