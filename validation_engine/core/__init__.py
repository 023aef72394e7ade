"""
Core domain: models, rule kinds and the rule engine.
"""
