"""Domain layer: pure workflows run by the loop engine.

This layer depends only on stdlib and :mod:`umpctl.runtime`.
It must never import from services, infrastructure, commands, or config.
"""
