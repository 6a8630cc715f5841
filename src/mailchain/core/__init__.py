"""
Core Infrastructure

Exceptions, configuration and the pipeline framework shared by all of MailChain.
"""
