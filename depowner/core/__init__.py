"""Service layer: configuration and the responsibility-aware auditor."""
