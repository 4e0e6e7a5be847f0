"""Core: configuration, constants, app wiring (lifespan, exception handlers, limiter)."""
