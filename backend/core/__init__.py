"""
Core configuration, logging and error types shared by loaders and services.
"""
