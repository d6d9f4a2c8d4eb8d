"""Root conftest so the in-tree package is importable when running pytest from a checkout."""
