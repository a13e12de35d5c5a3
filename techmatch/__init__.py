"""
TechMatch — patent marketplace backend.

Packages
--------
- api:
    FastAPI router, request/response models, JWT utilities, identity providers,
    error handlers, upload storage and the editorial content gateway.
- crypt:
    Password hashing helpers (bcrypt).
- database:
    Settings, SQLAlchemy engine, ORM entities, DAOs, transactional service layer.
- errors:
    Error taxonomy shared by the service and HTTP layers.
"""
