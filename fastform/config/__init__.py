"""Runtime configuration (runtime.yaml + environment overrides)."""
