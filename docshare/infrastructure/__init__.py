"""Infrastructure adapters: persistence, messaging, security."""
