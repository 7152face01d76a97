# mazebrain/sim/__init__.py
