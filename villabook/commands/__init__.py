"""CLI command implementations (imperative shell around the domain core)."""
