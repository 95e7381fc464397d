"""
Configuration module.

Default parameters, YAML override loading and validation for the report
pipeline and its notification destinations.
"""
