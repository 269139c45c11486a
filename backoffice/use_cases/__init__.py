"""Business use cases. Each exposes a declarative ``schema`` and ``execute()``."""
