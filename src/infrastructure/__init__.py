"""
Infrastructure package: persistence, notifications and monitoring adapters.
"""
