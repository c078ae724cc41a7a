"""HealthTown clinic backend: AI consultation orchestration and clinic records."""

__version__ = "1.0.0"
