"""
The `config` package provides the two building blocks for configuration and connectivity.

Contents:
    - config: strongly typed settings loaded from environment variables (with .env support), exposed as a singleton `settings`
    - connection_engine: SQLAlchemy bootstrap that builds the connection URL from those settings, creates the Engine, shared MetaData and the declarative base
"""
