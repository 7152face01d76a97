# mazebrain/utils/__init__.py
