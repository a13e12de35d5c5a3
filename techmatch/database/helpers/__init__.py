"""
The `helpers` package provides transaction handling shared by the service layer.

Contents
--------
- transactionManagement
    - Context variable (`db_session_context`) propagating the active session across function calls
    - `@transactional` decorator:
        - Reuses an existing session if one is active in context
        - Creates, commits, and closes a new session otherwise
        - Rolls back on errors and reports persistence failures as `StoreFailure`
"""
