# ledgermatch/routers/__init__.py

from ledgermatch.routers import health
from ledgermatch.routers import statements
from ledgermatch.routers import matches

__all__ = ["health", "statements", "matches"]
