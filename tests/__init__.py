"""Test suite for the Portal client.

Test Structure:
- unit/: Unit tests for individual components
  - api/http/: transport, status classification, errors, utilities
  - api/management/: PortalClient operations and payload models
  - config/: config loading and environment overrides
  - cli/: argument parsing and dispatch
- integration/: PortalClient against the in-memory FakePortal
- fixtures/: FakePortal served through httpx.MockTransport
"""
