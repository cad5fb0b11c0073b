"""Configuration layer — engine settings and logging setup.

Nothing here runs on import; applications opt in by calling
:func:`configure_logging` or by reading :func:`get_settings`.
"""
