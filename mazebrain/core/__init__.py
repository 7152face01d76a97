# mazebrain/core/__init__.py
