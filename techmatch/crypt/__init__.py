"""
The `crypt` package provides the password primitives used by registration and login.

Contents
--------
- encrypt_decrypt
    Utility module exposing the `EncryptionDec` class:
        * `hash_password` — one-way bcrypt hash with a fixed cost factor (10)
        * `check_passwords` — verifies a plaintext password against a stored hash
"""
