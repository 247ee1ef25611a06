"""
sessionkit - Pluggable Session Management

Opaque server-side sessions keyed by a random identifier, carried either in
an HTTP cookie (browsers) or in a request header token (API clients).

Architecture:
- Storage backends are black boxes behind the Provider interface
- Backends self-register by name in a provider registry at startup
- A Manager resolves one provider and mediates every lifecycle call

Modules:
- session: Manager, provider registry, identifier generation
"""

__version__ = "1.0.0"
