"""Service layer: retry execution and webhook handling."""
