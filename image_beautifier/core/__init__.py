"""Core runtime package.

Composition:
    - `settings`: immutable process configuration read once from the environment.
    - `errors`: tool-level error taxonomy shared by all layers.
    - `logging_setup`: stderr logging configuration with credential redaction.

Package import itself is side-effect free.
"""
