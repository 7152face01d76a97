# mazebrain/genetics/__init__.py
