"""Core configuration, error policy, throttling and run orchestration."""
