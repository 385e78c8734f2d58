"""
Configuration Management
=======================

Environment-based configuration using Pydantic Settings.

Components:
- settings: SDK and sample program settings
- logging: Structured logging configuration
"""
