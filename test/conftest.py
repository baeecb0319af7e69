import os

# Must run before any adapter module is imported: they connect on import.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ORM", "memory")
