"""
WebFinger Application Layer

Settings and process setup shared by the command-line front end.

Key Components:
- config.py: Configuration management using Pydantic settings
- cli.py: Logging and error reporting setup, and the HTTP session the CLI looks up with
"""
