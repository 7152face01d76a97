# mazebrain/io/__init__.py
