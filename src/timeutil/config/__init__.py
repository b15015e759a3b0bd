"""
Configuration loading (environment variables and .env files).
"""
