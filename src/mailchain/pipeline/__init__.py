"""
Message Pipeline

Concrete stages and the translation from configuration to a built chain.
"""
