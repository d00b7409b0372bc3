"""Settings package for the hotel booking admin.

`base.py` holds the configuration shared by every environment. `dev.py` and
`test.py` extend it with environment specific overrides.
"""
