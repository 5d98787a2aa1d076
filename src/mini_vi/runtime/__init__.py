"""Runtime services: settings, telemetry and the editor control loop."""
