"""Safety package.

Holds the per-tool sliding-window rate limiter that the dispatcher consults
before validating or executing a tool call.
"""
