"""Runtime services: configuration, telemetry, scheduling, and lifecycle."""
