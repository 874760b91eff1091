"""Runtime services shared across the engine (configuration, telemetry)."""
