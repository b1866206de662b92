"""Backend and sink adapters.

Adapters implement protocols defined in core/protocols/.
Each adapter wraps one destination (stdout, ``logging``, PostHog).
"""
