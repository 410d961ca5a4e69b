"""PotSettle -- poker session settlement service."""
