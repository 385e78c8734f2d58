"""
Infrastructure
==============

Dependency wiring and server connectivity.

Components:
- container: IoC kernel with transient, singleton and constant bindings
- dependency_resolver: process-wide resolve hook used by the SDK
- initializer: registers the SDK types with a container
- connection: connection factory, sign-in and service locator
- errors: SDK exception hierarchy
"""
